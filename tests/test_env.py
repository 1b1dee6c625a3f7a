import pytest

from rediskube import env


@pytest.mark.parametrize(
    "value, expected",
    [
        ("", None),
        ("default", ["default"]),
        ("default,kube-system", ["default", "kube-system"]),
        ("  default , kube-system  ", ["default", "kube-system"]),
    ],
)
def test_get_watch_namespaces(monkeypatch, value, expected):
    if value:
        monkeypatch.setenv(env.WATCH_NAMESPACE_ENV, value)
    else:
        monkeypatch.delenv(env.WATCH_NAMESPACE_ENV, raising=False)
    assert env.get_watch_namespaces() == expected


def test_get_watch_namespaces_only_separators(monkeypatch):
    monkeypatch.setenv(env.WATCH_NAMESPACE_ENV, " , ,")
    assert env.get_watch_namespaces() is None


@pytest.mark.parametrize(
    "value, default, expected",
    [
        ("", 1, 1),
        ("5", 1, 5),
        ("invalid", 3, 3),
    ],
)
def test_get_max_concurrent_reconciles(monkeypatch, value, default, expected):
    if value:
        monkeypatch.setenv(env.MAX_CONCURRENT_RECONCILES_ENV, value)
    else:
        monkeypatch.delenv(env.MAX_CONCURRENT_RECONCILES_ENV, raising=False)
    assert env.get_max_concurrent_reconciles(default) == expected


def test_get_max_concurrent_reconciles_rejects_padded_value(monkeypatch):
    monkeypatch.setenv(env.MAX_CONCURRENT_RECONCILES_ENV, " 5 ")
    assert env.get_max_concurrent_reconciles(3) == 3


@pytest.mark.parametrize(
    "value, expected",
    [
        ("", True),
        ("false", False),
        ("true", True),
    ],
)
def test_is_webhook_enabled(monkeypatch, value, expected):
    if value:
        monkeypatch.setenv(env.ENABLE_WEBHOOKS_ENV, value)
    else:
        monkeypatch.delenv(env.ENABLE_WEBHOOKS_ENV, raising=False)
    assert env.is_webhook_enabled() is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("", ""),
        ("GenerateConfigInInitContainer=true", "GenerateConfigInInitContainer=true"),
    ],
)
def test_get_feature_gates(monkeypatch, value, expected):
    if value:
        monkeypatch.setenv(env.FEATURE_GATES_ENV, value)
    else:
        monkeypatch.delenv(env.FEATURE_GATES_ENV, raising=False)
    assert env.get_feature_gates() == expected


def test_get_operator_image(monkeypatch):
    monkeypatch.setenv(env.OPERATOR_IMAGE_ENV, "registry.example.com/op:v1")
    assert env.get_operator_image() == "registry.example.com/op:v1"
    monkeypatch.delenv(env.OPERATOR_IMAGE_ENV)
    assert env.get_operator_image() == ""