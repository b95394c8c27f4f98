import a11ycore
from a11ycore import bless, validate
from a11ycore.engine import bless as engine_bless
from a11ycore.engine import validate as engine_validate


def test_namespace_exports_engine_functions():
    assert validate is engine_validate
    assert bless is engine_bless


def test_namespace_exports_models_and_registry():
    for name in ("SemanticNode", "Finding", "Severity", "BlessPolicy", "RuleRegistry", "default_registry"):
        assert hasattr(a11ycore, name)


def test_namespace_does_not_export_rule_internals():
    assert not hasattr(a11ycore, "walk")
    assert not hasattr(a11ycore, "SemanticHTMLRule")


def test_library_is_silent_without_configuration(capsys):
    validate({"type": "main", "role": "bogus"})
    assert capsys.readouterr().err == ""
