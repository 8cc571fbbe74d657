"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown on in-memory SQLite
- A seeded dataset of three companies and three jobs
"""

import logging
import os

# Point the application engine at SQLite before jobly.core.database is imported
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite:///:memory:")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobly.core.database import Base, enable_sqlite_foreign_keys
from jobly.models import Company, Job


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database session for each test.
    The schema is dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded_db(db_session):
    """
    Companies c1, c2, c3 with 1, 2 and 3 employees.
    Jobs: Farmer at c1; Engineer and Technician at c2; none at c3.
    """
    db_session.add_all([
        Company(handle="c1", name="Comp1", description="Desc1", num_employees=1, logo_url="http://c1.img"),
        Company(handle="c2", name="Comp2", description="Desc2", num_employees=2, logo_url="http://c2.img"),
        Company(handle="c3", name="Comp3", description="Desc3", num_employees=3, logo_url="http://c3.img"),
    ])
    db_session.flush()
    db_session.add_all([
        Job(title="Farmer", salary=50000, equity=0, company_handle="c1"),
        Job(title="Engineer", salary=75000, equity=0, company_handle="c2"),
        Job(title="Technician", salary=40000, equity=0, company_handle="c2"),
    ])
    db_session.commit()
    return db_session


@pytest.fixture
def new_company_data():
    """Sample company payload in external (camelCase) form"""
    return {
        "handle": "new",
        "name": "New",
        "description": "New Description",
        "numEmployees": 1,
        "logoUrl": "http://new.img",
    }


@pytest.fixture
def new_job_data():
    """Sample job payload in external (camelCase) form"""
    return {
        "title": "newJob",
        "salary": 30000,
        "equity": 0,
        "companyHandle": "c3",
    }


@pytest.fixture
def restore_root_logger():
    """Undo setup_logging() so pytest's own log capture keeps working"""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
