from admin_gateway.core.config import Settings
from admin_gateway.security.policy import AllowListPolicyStore


def test_exact_match_only():
    store = AllowListPolicyStore(["ops@platform.test"])
    assert store.is_superadmin("ops@platform.test") is True
    assert store.is_superadmin("OPS@platform.test") is False
    assert store.is_superadmin(" ops@platform.test") is False
    assert store.is_superadmin("ops@platform.test.evil") is False


def test_missing_email_is_never_superadmin():
    store = AllowListPolicyStore(["ops@platform.test"])
    assert store.is_superadmin(None) is False
    assert store.is_superadmin("") is False


def test_allow_list_parsing():
    settings = Settings(SUPERADMIN_EMAILS="a@x.test, b@x.test,,  ", LOG_DIR="")
    assert settings.superadmin_emails == ["a@x.test", "b@x.test"]
    assert len(AllowListPolicyStore(settings.superadmin_emails)) == 2


def test_empty_allow_list_denies_everyone():
    settings = Settings(SUPERADMIN_EMAILS="", LOG_DIR="")
    store = AllowListPolicyStore(settings.superadmin_emails)
    assert store.is_superadmin("ops@platform.test") is False
