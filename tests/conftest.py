"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- Sample companies and jobs
"""

import os

# Point the application at SQLite before app.core.database builds its engine
os.environ.setdefault("DB_URL", "sqlite://")

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, init_db, make_engine
from app.models import Company, Job


# Use in-memory SQLite for testing (fast, isolated)
engine = make_engine("sqlite://", poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create fresh tables and a session for each test.
    Tables are dropped after the test completes.
    """
    init_db(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded(db_session):
    """
    Companies c1..c3 (1..3 employees) and one job per company, j1..j3.

    Returns the job ids keyed by title.
    """
    db_session.add_all([
        Company(handle="c1", name="C1", num_employees=1, description="Desc1", logo_url="http://c1.img"),
        Company(handle="c2", name="C2", num_employees=2, description="Desc2", logo_url="http://c2.img"),
        Company(handle="c3", name="C3", num_employees=3, description="Desc3", logo_url="http://c3.img"),
    ])
    db_session.flush()

    jobs = [
        Job(title="j1", salary=1, equity=0.01, company_handle="c1"),
        Job(title="j2", salary=2, equity=0.02, company_handle="c2"),
        Job(title="j3", salary=3, equity=0.03, company_handle="c3"),
    ]
    db_session.add_all(jobs)
    db_session.commit()

    return {job.title: job.id for job in jobs}


@pytest.fixture
def sample_company_data():
    """Sample company payload for testing"""
    return {
        "handle": "new",
        "name": "New",
        "description": "New Description",
        "numEmployees": 1,
        "logoUrl": "http://new.img",
    }
