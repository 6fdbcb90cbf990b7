"""
Unit tests for the chaining Validator.

Includes property-based testing with hypothesis for rule invariants.
"""

import re
import time
from datetime import date
from decimal import Decimal
from fractions import Fraction

import pytest
from hypothesis import given
from hypothesis import strategies as st

from formrules import ValidationError, ValidationFailure, Validator


def rules_of(validator: Validator) -> list[str]:
    return [error.rule for error in validator.get_errors()]


@pytest.mark.unit
class TestRequired:
    """Tests for required()"""

    def test_present_value_passes(self):
        """Test present values record nothing"""
        validator = Validator({"name": "John"}).required("name")
        assert validator.get_errors() == []

    def test_missing_and_null_are_flagged(self):
        """Test absent keys and None values are both flagged"""
        validator = Validator({"name": None}).required("name", "email")

        errors = validator.get_errors()
        assert [(e.field, e.rule) for e in errors] == [("name", "required"), ("email", "required")]

    def test_empty_string_is_present(self):
        """Test empty string is not flagged by required"""
        validator = Validator({"name": ""}).required("name")
        assert validator.get_errors() == []

    @given(st.dictionaries(st.text(min_size=1), st.one_of(st.none(), st.text(), st.integers())))
    def test_property_one_error_per_missing_key(self, data):
        """Property test: exactly one error for each absent/None key"""
        keys = list(data) + ["__missing__"]
        validator = Validator(data).required(*keys)

        expected = [key for key in keys if data.get(key) is None]
        assert [e.field for e in validator.get_errors()] == expected
        assert set(rules_of(validator)) <= {"required"}


@pytest.mark.unit
class TestNotEmpty:
    """Tests for not_empty()"""

    @pytest.mark.parametrize("value", [None, "", 0, 0.0, False, [], {}])
    def test_empty_values_flagged(self, value):
        """Test Python-empty values are flagged"""
        validator = Validator({"field": value}).not_empty("field")
        assert rules_of(validator) == ["notEmpty"]

    @pytest.mark.parametrize("value", ["0", "a", 1, -1.5, True, [0]])
    def test_non_empty_values_pass(self, value):
        """Test non-empty values pass, including the string "0" """
        validator = Validator({"field": value}).not_empty("field")
        assert validator.get_errors() == []

    def test_missing_key_flagged(self):
        """Test absent keys are flagged"""
        assert rules_of(Validator({}).not_empty("field")) == ["notEmpty"]


@pytest.mark.unit
class TestLength:
    """Tests for length()"""

    def test_too_short_compounds_min_and_between(self):
        """Test length 2 against [3, 5] records minLength then betweenLength"""
        validator = Validator({"name": "ab"}).length("name", 3, 5)

        errors = validator.get_errors()
        assert [e.rule for e in errors] == ["minLength", "betweenLength"]
        assert errors[0].params == (3,)
        assert errors[1].params == (3, 5)

    def test_too_long_compounds_max_and_between(self):
        """Test length 7 against [3, 5] records maxLength then betweenLength"""
        validator = Validator({"name": "abcdefg"}).length("name", 3, 5)
        assert rules_of(validator) == ["maxLength", "betweenLength"]

    def test_within_bounds_passes(self):
        """Test length 4 against [3, 5] passes"""
        assert Validator({"name": "abcd"}).length("name", 3, 5).get_errors() == []

    def test_single_bounds(self):
        """Test a single bound never records betweenLength"""
        assert rules_of(Validator({"name": "ab"}).length("name", 3)) == ["minLength"]
        assert rules_of(Validator({"name": "abcdef"}).length("name", max=5)) == ["maxLength"]

    def test_non_string_is_coerced(self):
        """Test numbers are measured by their string form"""
        assert rules_of(Validator({"code": 12345}).length("code", max=4)) == ["maxLength"]

    def test_missing_value_has_zero_length(self):
        """Test absent values count as length 0"""
        assert rules_of(Validator({}).length("name", 1)) == ["minLength"]

    def test_length_counts_characters(self):
        """Test multi-byte characters count once"""
        assert Validator({"name": "éàü"}).length("name", 3, 3).get_errors() == []

    @given(st.text(max_size=30), st.integers(0, 15), st.integers(0, 15))
    def test_property_between_length_iff_outside(self, value, low, high):
        """Property test: betweenLength appears exactly when the length is outside [min, max]"""
        validator = Validator({"field": value}).length("field", low, high)

        outside = len(value) < low or len(value) > high
        assert ("betweenLength" in rules_of(validator)) == outside


@pytest.mark.unit
class TestDateTime:
    """Tests for date_time()"""

    def test_default_format_passes(self):
        """Test a well-formed timestamp passes"""
        validator = Validator({"at": "2024-02-29 23:59:59"}).date_time("at")
        assert validator.get_errors() == []

    @pytest.mark.parametrize("value", [
        "2024-02-30 10:00:00",   # out-of-range day
        "2024-13-01 10:00:00",   # out-of-range month
        "2024-01-01 25:00:00",   # out-of-range hour
        "2024-01-01 10:00:00x",  # trailing characters
        "2024-01-01",            # missing time
        "not a date",
        "",
    ])
    def test_invalid_values_flagged(self, value):
        """Test strict parsing rejects malformed values"""
        validator = Validator({"at": value}).date_time("at")

        errors = validator.get_errors()
        assert [e.rule for e in errors] == ["datetime"]
        assert errors[0].params == ("Y-m-d H:i:s",)

    def test_custom_format(self):
        """Test a custom format is used and reported"""
        ok = Validator({"day": "12/04/1990"}).date_time("day", "d/m/Y")
        bad = Validator({"day": "1990-04-12"}).date_time("day", "d/m/Y")

        assert ok.get_errors() == []
        assert bad.get_errors()[0].params == ("d/m/Y",)

    def test_missing_value_flagged(self):
        """Test absent values fail to parse"""
        assert rules_of(Validator({}).date_time("at")) == ["datetime"]


@pytest.mark.unit
class TestPatternRules:
    """Tests for slug(), phone() and email()"""

    @pytest.mark.parametrize("value", ["my-slug-1", "abc", "abc-", "a1-b2-c3"])
    def test_valid_slugs(self, value):
        assert Validator({"slug": value}).slug("slug").get_errors() == []

    @pytest.mark.parametrize("value", ["My Slug", "", "-abc", "a--b", "abc_def"])
    def test_invalid_slugs(self, value):
        assert rules_of(Validator({"slug": value}).slug("slug")) == ["slug"]

    @pytest.mark.parametrize("value", ["01-02-03-04", "01020304", " 01 02 03 04", "01/02_03 04"])
    def test_valid_phones(self, value):
        assert Validator({"phone": value}).phone("phone").get_errors() == []

    @pytest.mark.parametrize("value", ["123", "01-02-03-04-05", "01--02-03-04", "ab-cd-ef-gh"])
    def test_invalid_phones(self, value):
        assert rules_of(Validator({"phone": value}).phone("phone")) == ["phone"]

    @pytest.mark.parametrize("value", [
        "x@y.com",
        "John.Doe@Example.ORG",
        '"quoted local"@example.com',
        "user@[192.168.0.1]",
        "x@y.com and trailing text",
    ])
    def test_valid_emails(self, value):
        assert Validator({"email": value}).email("email").get_errors() == []

    @pytest.mark.parametrize("value", ["plainaddress", "@example.com", "a@b", "a@b.c", "a b@c.com"])
    def test_invalid_emails(self, value):
        assert rules_of(Validator({"email": value}).email("email")) == ["email"]

    @pytest.mark.parametrize("value", ["a" * 26 + "!", "a1-" * 200 + "_", "ab" * 5000 + "A"])
    def test_slug_rejects_long_invalid_input_quickly(self, value):
        """Test slug matching stays linear on long near-miss values"""
        start = time.perf_counter()
        validator = Validator({"slug": value}).slug("slug")
        elapsed = time.perf_counter() - start

        assert rules_of(validator) == ["slug"]
        assert elapsed < 0.5

    def test_missing_values_not_flagged(self):
        """Test pattern rules ignore absent and None values"""
        validator = Validator({"phone": None}).slug("slug").phone("phone").email("email")
        assert validator.get_errors() == []


@pytest.mark.unit
class TestNumber:
    """Tests for number()"""

    @pytest.mark.parametrize("value", [
        0, -3, 2.5, "42", "-1.5", "+7", ".5", "1e3", " 12 ", Decimal("1.5"), Fraction(1, 3),
    ])
    def test_numeric_values_pass(self, value):
        assert Validator({"n": value}).number("n").get_errors() == []

    @pytest.mark.parametrize("value", [None, "", "abc", "1,5", "12px", True, [1]])
    def test_non_numeric_values_flagged(self, value):
        assert rules_of(Validator({"n": value}).number("n")) == ["number"]

    def test_multiple_keys_in_argument_order(self):
        """Test errors follow argument order"""
        validator = Validator({"a": "x", "b": 1, "c": "y"}).number("c", "b", "a")
        assert [e.field for e in validator.get_errors()] == ["c", "a"]


@pytest.mark.unit
class TestEnum:
    """Tests for enum()"""

    def test_member_passes(self):
        assert Validator({"role": "a"}).enum("role", ["a", "b"]).get_errors() == []

    def test_non_member_flagged_with_json_param(self):
        """Test the candidate list is embedded as compact JSON"""
        validator = Validator({"role": "c"}).enum("role", ["a", "b"])

        errors = validator.get_errors()
        assert [e.rule for e in errors] == ["enum"]
        assert errors[0].params == ('["a","b"]',)
        assert '["a","b"]' in str(errors[0])

    @given(st.one_of(st.none(), st.text(), st.integers()))
    def test_property_empty_candidates_never_fail(self, value):
        """Property test: an empty candidate list disables the rule"""
        assert Validator({"role": value}).enum("role", []).get_errors() == []

    def test_non_json_candidates_rendered_as_text(self):
        """Test candidates such as dates do not break the enum message"""
        validator = Validator({"day": "x"}).enum("day", [date(2024, 1, 1)])

        errors = validator.get_errors()
        assert errors[0].params == ('["2024-01-01"]',)

    def test_missing_value_checked_against_candidates(self):
        """Test absent values fail unless None is a candidate"""
        assert rules_of(Validator({}).enum("role", ["a"])) == ["enum"]
        assert Validator({}).enum("role", [None, "a"]).get_errors() == []


@pytest.mark.unit
class TestBetween:
    """Tests for between()"""

    def test_within_range_passes(self):
        assert Validator({"age": "5"}).between("age", 1, 10).get_errors() == []

    def test_bounds_are_inclusive(self):
        validator = Validator({"low": 1, "high": 10}).between("low", 1, 10).between("high", 1, 10)
        assert validator.get_errors() == []

    def test_non_numeric_gets_only_number_error(self):
        """Test a non-numeric value records number and no range errors"""
        assert rules_of(Validator({"age": "abc"}).between("age", 1, 10)) == ["number"]

    def test_missing_value_gets_only_number_error(self):
        assert rules_of(Validator({}).between("age", 1, 10)) == ["number"]

    def test_above_max_compounds(self):
        validator = Validator({"age": 11}).between("age", 1, 10)

        errors = validator.get_errors()
        assert [e.rule for e in errors] == ["max", "between"]
        assert errors[0].params == (10,)
        assert errors[1].params == (1, 10)

    def test_below_min_compounds(self):
        assert rules_of(Validator({"age": "0.5"}).between("age", 1, 10)) == ["min", "between"]

    def test_decimal_and_fraction_values(self):
        """Test Decimal and Fraction values are compared against bounds"""
        validator = (
            Validator({"price": Decimal("12.5"), "ratio": Fraction(1, 2), "nan": Decimal("NaN")})
            .between("price", 1, 10)
            .between("ratio", 0, 1)
            .between("nan", 0, 1)
        )
        assert [(e.field, e.rule) for e in validator.get_errors()] == [
            ("price", "max"),
            ("price", "between"),
        ]

    def test_inverted_bounds_skip_combined_error(self):
        """Test max < min suppresses the between error without raising"""
        validator = Validator({"age": 5}).between("age", 10, 1)
        assert rules_of(validator) == ["max", "min"]

    def test_single_bounds(self):
        assert rules_of(Validator({"age": 20}).between("age", max=10)) == ["max"]
        assert rules_of(Validator({"age": -1}).between("age", 0)) == ["min"]


@pytest.mark.unit
class TestMatch:
    """Tests for match()"""

    def test_partial_match_passes(self):
        """Test the pattern is searched, not anchored"""
        assert Validator({"code": "xxABC123yy"}).match("code", r"[A-Z]{3}\d{3}").get_errors() == []

    def test_no_match_flagged(self):
        assert rules_of(Validator({"code": "abc"}).match("code", r"\d+")) == ["match"]

    def test_compiled_pattern(self):
        pattern = re.compile(r"^abc$", re.IGNORECASE)
        assert Validator({"code": "ABC"}).match("code", pattern).get_errors() == []

    def test_missing_value_not_flagged(self):
        assert Validator({}).match("code", r"\d+").get_errors() == []

    def test_invalid_pattern_records_error(self):
        """Test an invalid regex counts as a failed match instead of raising"""
        assert rules_of(Validator({"code": "abc"}).match("code", "(")) == ["match"]


@pytest.mark.unit
class TestErrorsAndTerminalCheck:
    """Tests for get_errors() and is_valid()"""

    def test_is_valid_without_errors(self):
        validator = Validator({"name": "John"}).required("name").length("name", 2, 10)
        assert validator.is_valid() is True
        assert validator.get_errors() == []

    def test_is_valid_raises_first_error(self):
        """Test the failure carries the first error across distinct rule calls"""
        validator = (
            Validator({"email": "nope", "age": "x"})
            .required("name")
            .email("email")
            .number("age")
        )

        with pytest.raises(ValidationFailure) as exc_info:
            validator.is_valid()

        failure = exc_info.value
        assert failure.error == ValidationError(field="name", rule="required")
        assert [e.rule for e in failure.errors] == ["required", "email", "number"]
        assert str(failure) == "The field name is required"

    def test_errors_follow_invocation_order(self):
        validator = (
            Validator({"age": 200, "slug": "Bad Slug"})
            .slug("slug")
            .required("b", "a")
            .between("age", 0, 100)
        )
        assert [(e.field, e.rule) for e in validator.get_errors()] == [
            ("slug", "slug"),
            ("b", "required"),
            ("a", "required"),
            ("age", "max"),
            ("age", "between"),
        ]

    def test_get_errors_returns_copy(self):
        validator = Validator({}).required("name")
        validator.get_errors().clear()
        assert len(validator.errors) == 1

    def test_data_is_read_only(self):
        data = {"name": "John"}
        validator = Validator(data)
        data["name"] = None

        assert validator.required("name").get_errors() == []
        with pytest.raises(TypeError):
            validator.data["name"] = None

    def test_custom_templates(self):
        """Test validator templates apply to messages and the raised failure"""
        templates = {"required": "Le champs %s est requis"}
        validator = Validator({}, templates=templates).required("nom")

        assert validator.messages() == ["Le champs nom est requis"]
        with pytest.raises(ValidationFailure, match="Le champs nom est requis"):
            validator.is_valid()
