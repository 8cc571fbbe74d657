"""
Test suite for job CRUD operations.

Tests cover:
- Job creation, duplicates and company references
- Filtered search
- Partial updates, including explicit nulls
- Removal
"""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.crud import job as job_crud


def _dump(jobs):
    return [job.model_dump(by_alias=True) for job in jobs]


FARMER = {"title": "Farmer", "salary": 50000, "equity": "0", "companyHandle": "c1"}
ENGINEER = {"title": "Engineer", "salary": 75000, "equity": "0", "companyHandle": "c2"}
TECHNICIAN = {"title": "Technician", "salary": 40000, "equity": "0", "companyHandle": "c2"}


class TestJobCreation:
    """Tests for job creation"""

    def test_create_job_success(self, seeded_db, new_job_data):
        job = job_crud.create(seeded_db, new_job_data)

        assert job.model_dump(by_alias=True) == {
            "title": "newJob",
            "salary": 30000,
            "equity": "0",
            "companyHandle": "c3",
        }
        row = seeded_db.execute(
            text("SELECT title, salary, company_handle FROM jobs WHERE title = 'newJob'")
        ).mappings().one()
        assert dict(row) == {"title": "newJob", "salary": 30000, "company_handle": "c3"}

    def test_create_job_fractional_equity(self, seeded_db, new_job_data):
        new_job_data["equity"] = 0.5

        job = job_crud.create(seeded_db, new_job_data)

        assert job.equity == "0.5"

    def test_create_duplicate_title(self, seeded_db, new_job_data):
        job_crud.create(seeded_db, new_job_data)

        with pytest.raises(BadRequestError) as exc_info:
            job_crud.create(seeded_db, new_job_data)

        assert "Duplicate job: newJob" in exc_info.value.message

    def test_create_equity_above_one(self, seeded_db, new_job_data):
        new_job_data["equity"] = 1.5

        with pytest.raises(BadRequestError):
            job_crud.create(seeded_db, new_job_data)

    def test_create_unknown_company(self, seeded_db, new_job_data):
        """The store rejects the reference; the error is not translated"""
        new_job_data["companyHandle"] = "nope"

        with pytest.raises(IntegrityError):
            job_crud.create(seeded_db, new_job_data)

        # Session is usable again after the failed insert
        assert len(job_crud.get(seeded_db)) == 3


class TestJobRetrieval:
    """Tests for job search"""

    def test_get_no_filter(self, seeded_db):
        assert _dump(job_crud.get(seeded_db)) == [ENGINEER, FARMER, TECHNICIAN]

    def test_filter_by_title(self, seeded_db):
        assert _dump(job_crud.get(seeded_db, {"title": "engineer"})) == [ENGINEER]

    def test_filter_by_min_salary(self, seeded_db):
        assert _dump(job_crud.get(seeded_db, {"minSalary": 50000})) == [ENGINEER, FARMER]

    def test_filter_has_equity(self, seeded_db):
        job_crud.create(seeded_db, {
            "title": "entrepreneur",
            "salary": 2000000,
            "equity": 0.5,
            "companyHandle": "c3",
        })

        assert _dump(job_crud.get(seeded_db, {"hasEquity": True})) == [{
            "title": "entrepreneur",
            "salary": 2000000,
            "equity": "0.5",
            "companyHandle": "c3",
        }]

    def test_filter_has_equity_false(self, seeded_db):
        assert _dump(job_crud.get(seeded_db, {"hasEquity": False})) == [ENGINEER, FARMER, TECHNICIAN]

    def test_filter_no_match(self, seeded_db):
        with pytest.raises(NotFoundError):
            job_crud.get(seeded_db, {"title": "Chef"})

    def test_title_wildcards_match_literally(self, seeded_db):
        with pytest.raises(NotFoundError):
            job_crud.get(seeded_db, {"title": "_armer"})

    def test_get_by_title(self, seeded_db):
        assert job_crud.get_by_title(seeded_db, "Farmer").model_dump(by_alias=True) == FARMER

    def test_get_by_title_not_found(self, seeded_db):
        with pytest.raises(NotFoundError):
            job_crud.get_by_title(seeded_db, "Chef")


class TestJobUpdate:
    """Tests for partial job updates"""

    update_data = {
        "salary": 42500,
        "equity": "0",
        "companyHandle": "c2",
    }

    def test_update_success(self, seeded_db):
        job = job_crud.update(seeded_db, "Technician", self.update_data)

        assert job.model_dump(by_alias=True) == {"title": "Technician", **self.update_data}

        rows = seeded_db.execute(
            text("SELECT title, salary FROM jobs WHERE company_handle = 'c2' ORDER BY title")
        ).all()
        assert [tuple(row) for row in rows] == [("Engineer", 75000), ("Technician", 42500)]

    def test_update_null_fields(self, seeded_db):
        job = job_crud.update(seeded_db, "Engineer", {
            "salary": None,
            "equity": None,
            "company_handle": "c3",
        })

        assert job.model_dump(by_alias=True) == {
            "title": "Engineer",
            "salary": None,
            "equity": None,
            "companyHandle": "c3",
        }
        row = seeded_db.execute(
            text("SELECT salary, equity, company_handle FROM jobs WHERE title = 'Engineer'")
        ).one()
        assert tuple(row) == (None, None, "c3")

    def test_update_not_found(self, seeded_db):
        with pytest.raises(NotFoundError):
            job_crud.update(seeded_db, "nope", self.update_data)

    def test_update_no_data(self, seeded_db):
        with pytest.raises(BadRequestError):
            job_crud.update(seeded_db, "Farmer", {})

    def test_update_company_to_null(self, seeded_db):
        with pytest.raises(BadRequestError):
            job_crud.update(seeded_db, "Farmer", {"companyHandle": None})

        assert job_crud.get_by_title(seeded_db, "Farmer").company_handle == "c1"

    def test_update_title_rejected(self, seeded_db):
        with pytest.raises(BadRequestError):
            job_crud.update(seeded_db, "Farmer", {"title": "Rancher"})


class TestJobRemove:
    """Tests for job removal"""

    def test_remove_success(self, seeded_db):
        job_crud.remove(seeded_db, "Technician")

        rows = seeded_db.execute(text("SELECT title FROM jobs WHERE title = 'Technician'")).all()
        assert rows == []

    def test_remove_not_found(self, seeded_db):
        with pytest.raises(NotFoundError):
            job_crud.remove(seeded_db, "nope")
