"""
Tests for the init_db script's sample data loader.
"""

from contextlib import contextmanager

import pytest

import init_db as script
from app.crud import company as company_crud
from app.crud import job as job_crud


@pytest.fixture
def script_db(db_session, monkeypatch):
    """Run the script against the test session"""
    @contextmanager
    def override_get_db():
        yield db_session

    monkeypatch.setattr(script, "get_db", override_get_db)
    return db_session


class TestSeed:
    """Tests for loading sample data"""

    def test_seed_loads_companies_and_jobs(self, script_db):
        script.seed()

        companies = company_crud.find_all(script_db)
        assert [c["handle"] for c in companies] == [
            "anderson-arias-morrow",
            "bauer-gallagher",
            "watson-davis",
        ]
        assert len(job_crud.find_all(script_db)) == len(script.SAMPLE_JOBS)

    def test_seed_twice_adds_nothing(self, script_db):
        script.seed()
        script.seed()

        assert len(company_crud.find_all(script_db)) == len(script.SAMPLE_COMPANIES)
        assert len(job_crud.find_all(script_db)) == len(script.SAMPLE_JOBS)

    def test_seeded_company_has_its_job(self, script_db):
        script.seed()

        company = company_crud.get(script_db, "watson-davis")
        assert [j["title"] for j in company["jobs"]] == ["Conservator, furniture"]
