"""Tests for the generated client-side validation script."""

from formkit import Decorator, Form, Input, ScriptRule
from formkit.core.config import get_config
from formkit.validation.script import (
    apply_contributors,
    get_validation_script_rules,
    match_condition,
    minlength_condition,
)


EMPTY_SCRIPT = (
    '<script type="text/javascript">\n'
    '    document.getElementById("input-name").addEventListener("input", function() {\n'
    "    });\n"
    "</script>"
)


class TestConditions:
    def test_minlength(self):
        assert minlength_condition(Input("x", minlength=5)) == "this.value.length >= 5"
        assert minlength_condition(Input("x", attrs={"minlength": "3"})) == "this.value.length >= 3"

    def test_minlength_absent_or_zero(self):
        assert minlength_condition(Input("x")) is None
        assert minlength_condition(Input("x", minlength=0)) is None

    def test_match_in_form(self):
        form = Form(id="signup")
        form.add(Input("password"))
        confirm = form.add(Input("confirm", match="password"))
        assert match_condition(confirm) == (
            'this.value == document.getElementById("signup-password").value'
        )

    def test_match_unresolved_is_literal(self):
        assert match_condition(Input("x", match="password")) == 'this.value == "password"'

    def test_rule_order(self):
        form = Form(id="f")
        form.add(Input("a"))
        control = form.add(Input("b", match="a", minlength=2))
        assert list(get_validation_script_rules(control)) == ["minlength", "match"]


class TestScript:
    def test_disabled_by_default(self):
        assert Input("name", minlength=5).get_validation_script() is None

    def test_enabled_by_configuration(self):
        get_config().set("options.validation-script", True)
        assert Input("name").get_validation_script() == EMPTY_SCRIPT

    def test_no_rules(self):
        assert Input("name", validation_script=True).get_validation_script() == EMPTY_SCRIPT

    def test_minlength_script(self):
        script = Input("name", minlength=5, validation_script=True).get_validation_script()
        assert script == (
            '<script type="text/javascript">\n'
            '    document.getElementById("input-name").addEventListener("input", function() {\n'
            "        if (!(this.value.length >= 5)) {\n"
            '            this.setCustomValidity("Please use " + 5 + " characters or more for this text");\n'
            "            return;\n"
            "        } else {\n"
            '            this.setCustomValidity("");\n'
            "        }\n"
            "    });\n"
            "</script>"
        )

    def test_live_value_in_message(self):
        control = Input(
            "name",
            minlength=3,
            validation_script=True,
            errors={"minlength": "Must match {{value}}"},
        )
        assert 'this.setCustomValidity("Must match " + this.value + "");' in (
            control.get_validation_script()
        )

    def test_match_script(self):
        class SignupForm(Form):
            password = Input(type="password")
            confirm = Input(type="password", match="password", validation_script=True)

        script = SignupForm()["confirm"].get_validation_script()
        assert 'document.getElementById("signup-form-confirm")' in script
        assert 'this.value == document.getElementById("signup-form-password").value' in script
        assert (
            '"Please match the value of " + '
            'document.getElementById("signup-form-password").value + ""'
        ) in script

    def test_element_id_escaped(self):
        script = Input("x", id='a"b', validation_script=True).get_validation_script()
        assert 'document.getElementById("a\\"b")' in script

    def test_message_escaped(self):
        control = Input(
            "name",
            minlength=2,
            validation_script=True,
            errors={"minlength": "</script><b>"},
        )
        script = control.get_validation_script()
        assert "</script><b>" not in script
        assert "\\x3c/script\\x3e\\x3cb\\x3e" in script


class TestContributors:
    def test_decorator_adds_rule(self):
        control = Input(
            "zip",
            minlength=4,
            validation_script=True,
            errors={"pattern": "Digits only"},
            decorators=[ScriptRule("pattern", "/^[0-9]*$/.test(this.value)")],
        )
        script = control.get_validation_script()

        assert "if (!(/^[0-9]*$/.test(this.value))) {" in script
        assert 'this.setCustomValidity("Digits only");' in script
        assert script.index("this.value.length >= 4") < script.index("/^[0-9]*$/")

    def test_replacing_rule_keeps_position(self):
        control = Input("zip", minlength=4, validation_script=True, match=Input("other"))
        control.add_script_rule(lambda element, rules: {**rules, "minlength": "true"})

        rules = apply_contributors(control, get_validation_script_rules(control), control.script_rule_contributors)
        assert list(rules) == ["minlength", "match"]
        assert rules["minlength"] == "true"

    def test_decorators_run_before_callbacks(self):
        calls = []

        class Tracking(Decorator):
            def apply_to_validation_script(self, element, rules):
                calls.append("decorator")
                rules["custom"] = "first"
                return rules

        def callback(element, rules):
            calls.append("callback")
            rules["custom"] = "second"

        control = Input("x", validation_script=True, decorators=[Tracking()])
        control.add_script_rule(callback)
        script = control.get_validation_script()

        assert calls == ["decorator", "callback"]
        assert "if (!(second))" in script
        assert "if (!(first))" not in script

    def test_contributor_gets_a_copy(self):
        original = {"minlength": "this.value.length >= 1"}

        def mutate(element, rules):
            rules.clear()
            return None

        assert apply_contributors(Input("x"), original, [mutate]) == {}
        assert original == {"minlength": "this.value.length >= 1"}

    def test_form_decorators(self):
        form = Form(id="f", decorators=[ScriptRule("required", "this.value != \"\"")])
        control = form.add(Input("name", validation_script=True))
        script = control.get_validation_script()

        assert 'if (!(this.value != "")) {' in script
        assert 'this.setCustomValidity("Please fill out this field");' in script

    def test_form_scripts(self):
        form = Form(id="f")
        form.add(Input("a", validation_script=True))
        form.add(Input("b"))
        scripts = form.get_validation_scripts()

        assert 'getElementById("f-a")' in scripts
        assert 'getElementById("f-b")' not in scripts
