"""Unit tests for the in-memory AccountStore."""

import pytest

from securestore.core.accounts import AccountStore
from securestore.core.exceptions import CorruptFileError


@pytest.fixture
def store():
    return AccountStore()


@pytest.fixture
def filled():
    return AccountStore({
        "serv1": {"acct1": "condo", "acct2": "hondo"},
        "serv2": {"acct1111": "janefondo"},
    })


# --- get ---

def test_get_on_empty_store_returns_none(store):
    assert store.get("serv1", "acct1") is None


def test_get_existing(filled):
    assert filled.get("serv1", "acct2") == "hondo"


def test_get_unknown_account_of_known_service(filled):
    assert filled.get("serv1", "nope") is None


def test_get_does_not_create_service(store):
    store.get("serv1", "acct1")
    assert store.to_dict() == {}


# --- set ---

def test_set_inserts_new_pair(store):
    assert store.set("serv1", "acct1", "condo") is True
    assert store.get("serv1", "acct1") == "condo"


def test_set_into_existing_service(filled):
    assert filled.set("serv2", "acct2", "x") is True
    assert filled.to_dict()["serv2"] == {"acct1111": "janefondo", "acct2": "x"}


def test_set_does_not_overwrite(filled):
    assert filled.set("serv1", "acct1", "other") is False
    assert filled.get("serv1", "acct1") == "condo"


@pytest.mark.parametrize("secret", [None, ""])
def test_set_without_secret_is_a_guarded_noop(store, secret):
    assert store.set("serv1", "acct1", secret) is False
    assert store.to_dict() == {}


def test_set_secret_defaults_to_missing(store):
    assert store.set("serv1", "acct1") is False
    assert store.get("serv1", "acct1") is None


# --- replace ---

def test_replace_creates_absent_pair(store):
    assert store.replace("serv1", "acct1", "hondo")
    assert store.get("serv1", "acct1") == "hondo"


def test_replace_overwrites_present_pair(filled):
    assert filled.replace("serv1", "acct1", "new")
    assert filled.get("serv1", "acct1") == "new"
    assert filled.get("serv1", "acct2") == "hondo"


def test_replace_without_secret_changes_nothing(filled):
    assert filled.replace("serv1", "acct1", None) is False
    assert filled.get("serv1", "acct1") == "condo"



@pytest.mark.parametrize("secret", [42, 4.2, b"condo", {"nested": "x"}, True])
def test_non_string_secret_raises_and_leaves_mapping_alone(filled, secret):
    before = {service: dict(accounts) for service, accounts in filled.to_dict().items()}

    with pytest.raises(TypeError):
        filled.set("serv3", "acct1", secret)
    with pytest.raises(TypeError):
        filled.replace("serv1", "acct1", secret)

    assert filled.to_dict() == before

# --- find ---

def test_find_unknown_service(store):
    assert store.find("serv1") is None


def test_find_returns_one_of_the_service_secrets(filled):
    assert filled.find("serv1") in {"condo", "hondo"}
    assert filled.find("serv2") == "janefondo"


def test_find_is_exact_match(filled):
    assert filled.find("serv") is None


def test_find_service_with_no_accounts():
    assert AccountStore({"empty": {}}).find("empty") is None


# --- delete ---

def test_delete_returns_removed_secret(filled):
    assert filled.delete("serv1", "acct1") == "condo"
    assert filled.get("serv1", "acct1") is None
    assert filled.get("serv1", "acct2") == "hondo"


def test_delete_absent_returns_false_not_none(filled):
    result = filled.delete("serv2", "cactusAccount")
    assert result is False


def test_delete_unknown_service(store):
    assert store.delete("nope", "nope") is False


def test_delete_last_account_drops_service(filled):
    filled.delete("serv2", "acct1111")
    assert "serv2" not in filled.to_dict()
    assert filled.services() == ["serv1"]


# --- helpers ---

def test_listing_helpers(filled):
    assert filled.services() == ["serv1", "serv2"]
    assert filled.accounts("serv1") == ["acct1", "acct2"]
    assert filled.accounts("missing") == []
    assert len(filled) == 3


def test_from_dict_accepts_valid_mapping():
    data = {"s": {"a": "b"}}
    assert AccountStore.from_dict(data).to_dict() == data


@pytest.mark.parametrize(
    "data",
    [
        ["not", "a", "dict"],
        {"s": "not a dict"},
        {"s": {"a": 1}},
        {"s": {"a": None}},
    ],
)
def test_from_dict_rejects_bad_shapes(data):
    with pytest.raises(CorruptFileError):
        AccountStore.from_dict(data)
