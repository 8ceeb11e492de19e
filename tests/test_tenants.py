"""
Unit tests for the tenant directory and ownership checks.
"""

import re

import pytest
from bson import ObjectId

from ezgest.core.exceptions import (
    ForbiddenError,
    InviteCodeNotFoundError,
    NotFoundError,
    NotMemberError,
    ValidationError,
)
from ezgest.services.auth_validation_service import auth_validation_service
from ezgest.services.tenant_service import generate_invite_code, tenant_service

from conftest import make_user


@pytest.fixture
def alice(db):
    return make_user(db, "alice@x.com")


@pytest.fixture
def bob(db):
    return make_user(db, "bob@x.com", nome="Bob", cognome="Bianchi")


@pytest.fixture
def shop(db, alice):
    return tenant_service.create(db, "Shop", alice["email"])


def companies_of(db, email):
    return db.users.find_one({"email": email})["companies"]


def test_invite_code_format():
    for _ in range(50):
        assert re.fullmatch(r"[A-Z0-9]{6}", generate_invite_code())


def test_create_adds_owner_membership(db, alice, shop):
    assert shop.name == "Shop"
    assert shop.owner == "alice@x.com"
    assert re.fullmatch(r"[A-Z0-9]{6}", shop.inviteCode)
    assert companies_of(db, "alice@x.com") == [shop.id]

    stored = db.companies.find_one({"_id": ObjectId(shop.id)})
    assert stored["inviteCode"] == shop.inviteCode
    assert "members" not in stored


def test_create_requires_name(db, alice):
    with pytest.raises(ValidationError):
        tenant_service.create(db, "   ", alice["email"])


def test_create_regenerates_taken_invite_code(db, alice, monkeypatch):
    codes = iter(["TAKEN1", "FRESH1"])
    monkeypatch.setattr("ezgest.services.tenant_service.generate_invite_code", lambda: next(codes))
    db.companies.insert_one({"name": "Other", "inviteCode": "TAKEN1", "owner": "x@x.com"})

    company = tenant_service.create(db, "Shop", alice["email"])
    assert company.inviteCode == "FRESH1"


def test_join_with_code(db, bob, shop):
    company = tenant_service.join(db, shop.inviteCode, bob["email"])
    assert company.id == shop.id
    assert companies_of(db, "bob@x.com") == [shop.id]


def test_join_twice_is_idempotent(db, bob, shop):
    tenant_service.join(db, shop.inviteCode, bob["email"])
    tenant_service.join(db, shop.inviteCode, bob["email"])
    assert companies_of(db, "bob@x.com") == [shop.id]


def test_join_wrong_code(db, bob, shop):
    with pytest.raises(InviteCodeNotFoundError) as exc_info:
        tenant_service.join(db, "ZZZZZZ", bob["email"])
    assert exc_info.value.status_code == 400
    assert companies_of(db, "bob@x.com") == []


def test_list_memberships_drops_corrupt_ids(db, alice, shop):
    db.users.update_one({"email": "alice@x.com"}, {"$push": {"companies": {"$each": ["not-an-id", str(ObjectId())]}}})

    companies = tenant_service.list_memberships(db, "alice@x.com")
    assert [company.id for company in companies] == [shop.id]


def test_list_memberships_unknown_user(db):
    assert tenant_service.list_memberships(db, "ghost@x.com") == []


def test_list_members_is_derived_from_users(db, alice, bob, shop):
    tenant_service.join(db, shop.inviteCode, bob["email"])
    make_user(db, "carol@x.com")

    members = tenant_service.list_members(db, shop.id)
    assert [member.email for member in members] == ["alice@x.com", "bob@x.com"]
    assert [member.isOwner for member in members] == [True, False]


def test_owner_removes_member(db, alice, bob, shop):
    tenant_service.join(db, shop.inviteCode, bob["email"])
    tenant_service.remove_member(db, shop.id, str(bob["_id"]), alice["email"])
    assert companies_of(db, "bob@x.com") == []


def test_non_owner_cannot_remove(db, alice, bob, shop):
    tenant_service.join(db, shop.inviteCode, bob["email"])
    with pytest.raises(ForbiddenError):
        tenant_service.remove_member(db, shop.id, str(alice["_id"]), bob["email"])
    assert companies_of(db, "alice@x.com") == [shop.id]


def test_owner_cannot_remove_self(db, alice, shop):
    with pytest.raises(ValidationError):
        tenant_service.remove_member(db, shop.id, str(alice["_id"]), alice["email"])
    assert companies_of(db, "alice@x.com") == [shop.id]


def test_member_cannot_remove_self(db, bob, shop):
    tenant_service.join(db, shop.inviteCode, bob["email"])
    with pytest.raises(ValidationError):
        tenant_service.remove_member(db, shop.id, str(bob["_id"]), bob["email"])


def test_remove_unknown_target(db, alice, shop):
    with pytest.raises(NotFoundError):
        tenant_service.remove_member(db, shop.id, str(ObjectId()), alice["email"])
    with pytest.raises(NotFoundError):
        tenant_service.remove_member(db, shop.id, "garbage", alice["email"])


def test_require_owner_unknown_company(db, alice):
    with pytest.raises(NotFoundError):
        auth_validation_service.require_owner(db, str(ObjectId()), alice["email"])


def test_membership_check(db, alice, bob, shop):
    user = auth_validation_service.validate_user_tenant_access(db, "alice@x.com", shop.id)
    assert user["email"] == "alice@x.com"

    with pytest.raises(NotMemberError):
        auth_validation_service.validate_user_tenant_access(db, "bob@x.com", shop.id)
    with pytest.raises(NotMemberError):
        auth_validation_service.validate_user_tenant_access(db, "ghost@x.com", shop.id)
