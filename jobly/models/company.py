from sqlalchemy import Column, Integer, String, Text, CheckConstraint
from jobly.core.database import Base


class Company(Base):
    """
    A company that posts jobs.

    The handle is the public, immutable identifier and the target of
    jobs.company_handle.
    """
    __tablename__ = "companies"
    __table_args__ = (
        CheckConstraint("num_employees >= 0", name="ck_companies_num_employees"),
    )

    handle = Column(String(25), primary_key=True)
    name = Column(Text, nullable=False, index=True)
    description = Column(Text, nullable=False)
    num_employees = Column(Integer, nullable=True)
    logo_url = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Company(handle='{self.handle}', name='{self.name}')>"
