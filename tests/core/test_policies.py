"""Tests for `symtab.core.policies` miss handling."""

import pytest

from symtab.core.errors import PolicyError
from symtab.core.manager import StringBaseNumberedManager
from symtab.core.numbered import NumberedModel
from symtab.core.policies import (
    MissPolicyKind,
    OptionReturner,
    UnkObjectReturner,
    UnkWithTemplateReturner,
    make_policy,
    miss_policy_kind_from_value,
)
from symtab.core.templates import compose, identity, lowercase, replace_digits


class Token(NumberedModel):
    text: str


def _make(policy):
    return StringBaseNumberedManager(lambda s: Token(text=s), policy)


def test_default_policy_is_strict_optional() -> None:
    m = StringBaseNumberedManager(lambda s: Token(text=s))
    assert isinstance(m.policy, OptionReturner)
    assert m.policy.kind is MissPolicyKind.STRICT_OPTIONAL


def test_option_returner_miss_is_none() -> None:
    m = _make(OptionReturner())
    cat = m.get_or_create("cat")

    assert m.get("cat") is cat
    assert m.get("bird") is None
    assert m.unknown() is None
    assert m.size() == 1


def test_cat_dog_cat_with_sentinel_key() -> None:
    m = _make(UnkObjectReturner(unknown_key="<UNK>"))
    unk = m.unknown()
    assert unk.id == 0
    assert unk.text == "<UNK>"

    for w in ["cat", "dog", "cat"]:
        m.get_or_create(w)

    assert m.size() == 3  # sentinel + cat + dog
    assert m.get_or_create("cat").id == m.get_or_create("cat").id == 1
    assert m.get("dog").id == 2
    assert m.get("bird") is unk
    assert m.size() == 3


def test_sentinel_entity_need_not_be_registered() -> None:
    sentinel = Token(text="?")
    m = _make(UnkObjectReturner(unknown=sentinel))
    m.get_or_create("cat")

    assert m.get("bird") is sentinel
    assert m.size() == 1


@pytest.mark.parametrize(
    "kwargs",
    [{}, {"unknown": Token(text="?"), "unknown_key": "<UNK>"}],
)
def test_sentinel_policy_needs_exactly_one_source(kwargs) -> None:
    with pytest.raises(PolicyError, match="exactly one"):
        UnkObjectReturner(**kwargs)


def test_unbound_sentinel_key_has_no_unknown_yet() -> None:
    policy = UnkObjectReturner(unknown_key="<UNK>")
    with pytest.raises(PolicyError, match="not bound"):
        policy.unknown


def test_policy_binds_to_one_manager_only() -> None:
    policy = OptionReturner()
    _make(policy)
    with pytest.raises(PolicyError, match="already bound"):
        _make(policy)


def test_failed_sentinel_registration_leaves_policy_reusable() -> None:
    def no_markup(s: str) -> Token:
        if s.startswith("<"):
            raise ValueError(f"markup not allowed: {s!r}")
        return Token(text=s)

    policy = UnkObjectReturner(unknown_key="<UNK>")
    with pytest.raises(ValueError, match="markup not allowed"):
        StringBaseNumberedManager(no_markup, policy)

    m = _make(policy)
    assert policy.manager is m
    assert m.unknown().id == 0


def test_rebinding_does_not_register_sentinel_in_second_manager() -> None:
    policy = UnkObjectReturner(unknown_key="<UNK>")
    first = _make(policy)
    created: list[str] = []

    def tracking(s: str) -> Token:
        created.append(s)
        return Token(text=s)

    with pytest.raises(PolicyError, match="already bound"):
        StringBaseNumberedManager(tracking, policy)
    assert created == []
    assert policy.manager is first


def test_unbound_policy_cannot_look_up() -> None:
    with pytest.raises(PolicyError, match="not bound"):
        OptionReturner().get("cat")
    with pytest.raises(PolicyError, match="not bound"):
        UnkWithTemplateReturner(lowercase, unknown=Token(text="?")).register_template_for("Cat")


def test_policy_serves_its_own_manager() -> None:
    policy = OptionReturner()
    m = _make(policy)
    other = _make(OptionReturner())
    other.get_or_create("cat")

    assert policy.manager is m
    assert policy.get("cat") is None
    assert m.get("cat") is None


def test_template_fallback_resolves_to_template_entity() -> None:
    template = compose(lowercase, replace_digits)
    m = _make(UnkWithTemplateReturner(template, unknown_key="<UNK>"))
    m.get_or_create("paris")
    registered = m.register_template_for("Route66")

    assert registered.text == "route00"
    assert m.get("Route66") is registered  # never registered itself
    assert m.get("ROUTE12") is registered
    assert m.get("PARIS") is m.get("paris")
    assert m.get("berlin") is m.unknown()
    assert "Route66" not in m


def test_template_fallback_identity_template_terminates() -> None:
    m = _make(UnkWithTemplateReturner(identity, unknown_key="<UNK>"))
    assert m.get("X") is m.unknown()


def test_template_fallback_retries_only_once() -> None:
    calls: list[str] = []

    def chained(text: str) -> str:
        calls.append(text)
        return text + "'"

    m = _make(UnkWithTemplateReturner(chained, unknown_key="<UNK>"))
    m.get_or_create("a''")  # reachable after two rewrites, but only one is tried

    assert m.get("a") is m.unknown()
    assert calls == ["a"]


def test_get_never_registers() -> None:
    m = _make(UnkWithTemplateReturner(lowercase, unknown_key="<UNK>"))
    before = m.size()
    for key in ["A", "b", "C"]:
        m.get(key)
    assert m.size() == before
    assert m.export_mappings() == {"<UNK>": 0}


def test_register_template_requires_template_policy() -> None:
    m = _make(UnkObjectReturner(unknown_key="<UNK>"))
    with pytest.raises(PolicyError, match="template_fallback"):
        m.register_template_for("Route66")


@pytest.mark.parametrize(
    "value,expected",
    [
        ("strict_optional", MissPolicyKind.STRICT_OPTIONAL),
        (" SENTINEL ", MissPolicyKind.SENTINEL),
        ("template-fallback", MissPolicyKind.TEMPLATE_FALLBACK),
        (MissPolicyKind.SENTINEL, MissPolicyKind.SENTINEL),
    ],
)
def test_miss_policy_kind_from_value(value, expected: MissPolicyKind) -> None:
    assert miss_policy_kind_from_value(value) is expected


def test_miss_policy_kind_unknown_value() -> None:
    with pytest.raises(PolicyError, match="unknown miss policy"):
        miss_policy_kind_from_value("lenient")


def test_make_policy_builds_each_kind() -> None:
    assert isinstance(make_policy("strict_optional", unknown_key="<UNK>"), OptionReturner)

    sentinel = make_policy("sentinel", unknown_key="<UNK>")
    assert type(sentinel) is UnkObjectReturner

    templ = make_policy("template_fallback", unknown_key="<UNK>", extract_template=lowercase)
    assert isinstance(templ, UnkWithTemplateReturner)
    assert templ.extract_template is lowercase


def test_make_policy_template_needs_extractor() -> None:
    with pytest.raises(PolicyError, match="extract_template"):
        make_policy("template_fallback", unknown_key="<UNK>")
