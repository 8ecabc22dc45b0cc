"""Tests for the validation pipeline."""

from datetime import date

import pytest

from formkit import ConfigurationError, Form, Input, Upload, UploadErrorCode, ValidationFailed
from formkit.validation import (
    Bound,
    ControlError,
    InputTypeError,
    LengthError,
    MatchError,
    PatternError,
    RangeError,
    RequiredError,
    RequiredRule,
    Rule,
    TypeRule,
    UploadError,
    Validator,
    validate,
    validate_or_fail,
)
from formkit.validation.types import InputType


ALL_TYPES = [t.value for t in InputType]


class TestRequired:
    @pytest.mark.parametrize("type", ALL_TYPES)
    def test_empty_fails_for_every_type(self, type):
        control = Input("field", type=type, required=True).set_value("")
        assert not control.validate()
        assert isinstance(control.error, RequiredError)
        assert control.error.message == "Please fill out this field"

    def test_unset_value(self):
        control = Input("name", required=True)
        assert not control.validate()
        assert control.error.rule == "required"

    def test_unchecked_checkbox(self):
        control = Input("agree", type="checkbox", required=True)
        assert not control.validate()
        assert control.set_value(True).validate()

    def test_zero_is_a_value(self):
        assert Input("count", type="number", required=True).set_value("0").validate()

    def test_required_from_attribute(self):
        control = Input("name", attrs={"required": True})
        assert not control.validate()

    def test_custom_message(self):
        control = Input("name", required=True, errors={"required": "{{name}} is missing"})
        control.validate()
        assert control.error.message == "name is missing"


class TestEmptyBypass:
    @pytest.mark.parametrize("type", ALL_TYPES)
    def test_empty_skips_constraints(self, type):
        control = Input(
            "field",
            type=type,
            minlength=3,
            pattern="x",
            min=5,
            match="other",
        ).set_value("")
        assert control.validate()
        assert control.error is None


class TestType:
    @pytest.mark.parametrize(
        "type, good, bad",
        [
            ("number", "12", "12a"),
            ("email", "a@b.co", "a@b"),
            ("url", "https://example.com", "example.com"),
            ("color", "#00ff00", "green"),
            ("date", "2024-02-29", "2024-02-30"),
            ("time", "08:15:00", "8:15"),
            ("month", "2024-05", "2024-5-1"),
            ("week", "2024-W01", "2024-W60"),
            ("range", "0.5", "half"),
            ("datetime-local", "2024-05-01T12:30:00+02:00", "2024-05-01T12:30:00"),
        ],
    )
    def test_type_check(self, type, good, bad):
        assert Input("field", type=type).set_value(good).validate()

        control = Input("field", type=type).set_value(bad)
        assert not control.validate()
        assert isinstance(control.error, InputTypeError)
        assert control.error.message == f"Please enter a valid {type}"

    def test_text_accepts_anything(self):
        assert Input("field").set_value("<anything>").validate()


class TestRange:
    def test_min(self):
        control = Input("age", type="number", min=18)
        assert control.set_value("18").validate()

        assert not control.set_value("17").validate()
        assert isinstance(control.error, RangeError)
        assert control.error.rule == "min"
        assert control.error.bound is Bound.MIN
        assert control.error.message == "Value must be greater or equal to 18"

    def test_max(self):
        control = Input("age", type="number", max=65)
        assert control.set_value(65).validate()

        assert not control.set_value(66).validate()
        assert control.error.rule == "max"
        assert control.error.bound is Bound.MAX
        assert control.error.message == "Value must be less or equal to 65"

    def test_numeric_not_lexical(self):
        assert Input("qty", type="number", max=10).set_value("9").validate()
        assert not Input("qty", type="number", min=10).set_value("9").validate()

    def test_dates(self):
        control = Input("start", type="date", min="2024-01-01", max=date(2024, 12, 31))
        assert control.set_value("2024-06-01").validate()
        assert not control.set_value("2023-12-31").validate()
        assert not control.set_value("2025-01-01").validate()
        assert control.error.rule == "max"

    def test_zero_bound_is_a_constraint(self):
        assert not Input("n", type="range", min=0).set_value("-1").validate()


class TestLength:
    def test_minlength(self):
        control = Input("name", minlength=3)
        assert control.set_value("abc").validate()

        assert not control.set_value("ab").validate()
        assert isinstance(control.error, LengthError)
        assert control.error.rule == "minlength"
        assert control.error.bound is Bound.MIN
        assert control.error.message == "Please use 3 characters or more for this text"

    def test_maxlength(self):
        control = Input("name", maxlength=3)
        assert control.set_value("abc").validate()

        assert not control.set_value("abcd").validate()
        assert control.error.rule == "maxlength"
        assert control.error.bound is Bound.MAX
        assert control.error.message == "Please shorten this text to 3 characters or less"

    def test_length_from_attribute(self):
        assert not Input("code", attrs={"maxlength": "2"}).set_value("abc").validate()

    def test_invalid_length_option(self):
        with pytest.raises(ConfigurationError):
            Input("name", minlength="many").set_value("abc").validate()


class TestPattern:
    def test_pattern(self):
        control = Input("zip", pattern=r"\d{4}")
        assert control.set_value("1234").validate()

        assert not control.set_value("12a4").validate()
        assert isinstance(control.error, PatternError)
        assert control.error.message == "Please match the requested format"

    def test_pattern_is_not_anchored(self):
        assert Input("zip", pattern=r"\d{4}").set_value("zip 1234").validate()

    def test_invalid_pattern(self):
        with pytest.raises(ConfigurationError):
            Input("zip", pattern="(").set_value("1").validate()


class TestMatch:
    def make_form(self, **confirm_options):
        form = Form(id="signup")
        form.add(Input("password", type="password"))
        form.add(Input("confirm", type="password", match="password", **confirm_options))
        return form

    def test_match(self):
        form = self.make_form()
        form.bind({"password": "secret", "confirm": "secret"})
        assert form["confirm"].validate()

    def test_mismatch(self):
        form = self.make_form()
        form.bind({"password": "secret", "confirm": "secrets"})

        control = form["confirm"]
        assert not control.validate()
        assert isinstance(control.error, MatchError)
        assert control.error.other is form["password"]
        assert control.error.message == "Please match the value of Password"

    def test_loose_equality(self):
        form = Form(id="f")
        form.add(Input("a", type="number")).set_value(5)
        form.add(Input("b", match="a")).set_value("5")
        assert form["b"].validate()

    def test_match_element_option(self):
        other = Input("other", value="x")
        assert Input("mine", match=other).set_value("x").validate()
        assert not Input("mine", match=other).set_value("y").validate()

    def test_unknown_element(self):
        form = Form(id="f")
        form.add(Input("b", match="missing")).set_value("5")
        with pytest.raises(ConfigurationError):
            form["b"].validate()

    def test_without_form(self):
        with pytest.raises(ConfigurationError):
            Input("b", match="a").set_value("5").validate()


class TestUpload:
    def test_ok(self):
        upload = Upload(name="a.txt", size=3)
        assert Input("doc", type="file").set_value(upload).validate()

    @pytest.mark.parametrize(
        "code, message",
        [
            (UploadErrorCode.INI_SIZE, "The uploaded file exceeds the maximum upload size"),
            (UploadErrorCode.PARTIAL, "The uploaded file was only partially uploaded"),
            (UploadErrorCode.NO_FILE, "No file was uploaded"),
            (UploadErrorCode.EXTENSION, "File upload stopped by extension"),
        ],
    )
    def test_error_codes(self, code, message):
        control = Input("doc", type="file").set_value(Upload(error=code))
        assert not control.validate()
        assert isinstance(control.error, UploadError)
        assert control.error.code == code
        assert control.error.message == message

    def test_mapping_payload(self):
        control = Input("doc", type="file").set_value({"name": "a.txt", "error": 2})
        assert not control.validate()
        assert control.error.code == 2

    @pytest.mark.parametrize("code", ["0", 0, None, ""])
    def test_mapping_without_error(self, code):
        control = Input("doc", type="file").set_value({"name": "a.txt", "error": code})
        assert control.validate()
        assert control.error is None

    def test_string_code(self):
        control = Input("doc", type="file").set_value({"name": "a.txt", "error": "3"})
        assert not control.validate()
        assert control.error.code == UploadErrorCode.PARTIAL

    def test_upload_from_mapping(self):
        upload = Upload.from_mapping({"name": "a.txt", "size": "12", "error": "0"})
        assert upload == Upload(name="a.txt", size=12, error=0)
        assert upload.ok
        assert not Upload.from_mapping({"error": "4"}).ok

    def test_unknown_code(self):
        control = Input("doc", type="file").set_value(Upload(error=5))
        assert not control.validate()
        assert control.error.message is None

    def test_custom_messages(self):
        control = Input("doc", type="file", errors={"upload": {"3": "Try again"}})
        control.set_value(Upload(error=3))
        assert not control.validate()
        assert control.error.message == "Try again"

    def test_upload_rule_only_for_files(self):
        assert Input("name").set_value({"error": 3}).validate()


class TestPipeline:
    def test_first_failure_wins(self):
        control = Input("email", type="email", minlength=50).set_value("bad")
        assert not control.validate()
        assert control.error.rule == "type"

    def test_order_range_before_length(self):
        control = Input("n", type="number", min=100, maxlength=1).set_value("42")
        control.validate()
        assert control.error.rule == "min"

    def test_error_cleared_on_success(self):
        control = Input("name", required=True)
        assert not control.validate()
        assert control.set_value("x").validate()
        assert control.error is None

    def test_basic_validation_disabled(self):
        control = Input("email", type="email", required=True, basic_validation=False)
        assert control.validate()
        assert control.error is None

    def test_is_valid_and_message(self):
        control = Input("name", required=True)
        assert control.is_valid() is False
        assert control.error_message == "Please fill out this field"

    def test_module_validate(self):
        control = Input("email", type="email").set_value("a@b")
        assert validate(control) is False
        assert control.error.rule == "type"

    def test_validate_or_fail(self):
        assert validate_or_fail(Input("name").set_value("x")) == "x"

        with pytest.raises(ValidationFailed) as exc_info:
            validate_or_fail(Input("name", required=True))

        assert exc_info.value.first().rule == "required"
        assert "name: Please fill out this field" in str(exc_info.value)

    def test_logs_failures(self, log_records):
        Input("email", type="email").set_value("nope").validate()

        record = log_records[-1]
        assert record.message == "Validation failed"
        assert record.context["control"] == "email"
        assert record.context["rule"] == "type"


class TestCustomValidator:
    def test_custom_rule(self):
        class NoSpaces(Rule):
            name = "nospaces"

            def validate(self, control, value):
                if " " in str(value):
                    return ControlError(self.name, "No spaces")
                return None

        validator = Validator().add_rule(NoSpaces())
        control = Input("user").set_value("a b")
        assert not validator.validate(control)
        assert control.error.message == "No spaces"

    def test_remove_rule(self):
        validator = Validator().remove_rule(TypeRule)
        assert validator.validate(Input("email", type="email").set_value("bad"))

    def test_validate_all(self):
        validator = Validator([RequiredRule()])
        result = validator.validate_all([
            Input("a", required=True).set_value("x"),
            Input("b", required=True),
        ])

        assert not result
        assert result.data == {"a": "x"}
        assert result.has_error("b")
        assert result.first_error().rule == "required"
        assert result.messages() == {"b": "Please fill out this field"}
