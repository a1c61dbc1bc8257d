import pytest

from template_search.orchestrators.search.keywords import initial_keyword, normalize_keywords
from template_search.orchestrators.search.models import QueryContext


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("bakery, cafe", ["bakery", "cafe"]),
        ("  Bakery ,BAKERY, cafe ", ["bakery", "cafe"]),
        ("bakery,,  ,cafe", ["bakery", "cafe"]),
        (["Dentist", "dentist, clinic"], ["dentist", "clinic"]),
        ("", []),
        (" , ,", []),
        (None, []),
    ],
)
def test_normalize_keywords(raw, expected):
    assert normalize_keywords(raw) == expected


def test_initial_keyword_prefers_business_type():
    ctx = QueryContext(business_name="Joe's", business_type="Restaurant", suggested_keywords=["food"])
    assert initial_keyword(ctx) == "restaurant"


def test_initial_keyword_falls_back_to_first_suggestion_for_others():
    ctx = QueryContext(business_name="Joe's", business_type="Others", suggested_keywords=["food", "pizza"])
    assert initial_keyword(ctx) == "food"


def test_initial_keyword_falls_back_to_business_name():
    ctx = QueryContext(business_name="Joe's Pizza", business_type="others")
    assert initial_keyword(ctx) == "Joe's Pizza"
