"""
Tests for the error hierarchy.
"""

from app.core.exceptions import BadRequestError, JoblyError, NotFoundError


class TestErrors:
    """Status codes and error bodies"""

    def test_status_codes(self):
        assert JoblyError("boom").status_code == 500
        assert BadRequestError("No data").status_code == 400
        assert NotFoundError("No company: c9").status_code == 404

    def test_status_override(self):
        assert JoblyError("Unauthorized", status_code=401).status_code == 401
        assert BadRequestError("still bad").status_code == 400

    def test_subclasses_share_base(self):
        assert issubclass(BadRequestError, JoblyError)
        assert issubclass(NotFoundError, JoblyError)

    def test_to_dict(self):
        err = BadRequestError("Invalid filter: hasEquity", details={"filter": "hasEquity"})

        assert str(err) == "Invalid filter: hasEquity"
        assert err.to_dict() == {
            "error": {
                "message": "Invalid filter: hasEquity",
                "status": 400,
                "details": {"filter": "hasEquity"},
            }
        }

    def test_to_dict_without_details(self):
        assert NotFoundError("No job: 7").to_dict() == {
            "error": {"message": "No job: 7", "status": 404}
        }
