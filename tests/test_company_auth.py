import uuid

import pytest

from security.permissions import ALL_PERMISSIONS
from security.tokens import create_access_token, decode_access_token, InvalidTokenError
from services.auth_service import AuthService
from services.certificate_service import CertificateService
from services.company_service import CompanyService
from services.errors import AuthenticationError, ConflictError, ValidationError

SIGNUP = {
    "company_name": "Acme",
    "owner_name": "Olivia Owner",
    "admin_email": "Olivia@Acme.io",
    "admin_password": "Secret123",
}


async def test_signup_seeds_roles_and_owner(sql_gateway):
    company, owner = await CompanyService(sql_gateway).signup(SIGNUP)

    roles = {r.name: r for r in await sql_gateway.list_roles(company.id)}
    assert set(roles) == {"Owner", "Admin", "Employee"}
    assert roles["Employee"].is_default
    assert owner.role_id == roles["Owner"].id
    assert owner.email == "olivia@acme.io"
    assert company.admin_user_id == owner.id


async def test_signup_rejects_taken_email(sql_gateway):
    await CompanyService(sql_gateway).signup(SIGNUP)

    with pytest.raises(ConflictError):
        await CompanyService(sql_gateway).signup({**SIGNUP, "company_name": "Globex"})


async def test_signup_requires_fields(sql_gateway):
    with pytest.raises(ValidationError, match="owner_name"):
        await CompanyService(sql_gateway).signup({**SIGNUP, "owner_name": " "})


async def test_sign_in_and_resolve_session(sql_gateway):
    company, owner = await CompanyService(sql_gateway).signup(SIGNUP)
    auth = AuthService(sql_gateway)

    token = await auth.sign_in("olivia@acme.io", "Secret123")
    session = await auth.resolve_session(decode_access_token(token))

    assert session.user_id == owner.id
    assert session.company_id == company.id
    assert session.company_name == "Acme"
    assert session.role_name == "Owner"
    assert session.permissions == ALL_PERMISSIONS
    assert (await sql_gateway.get_user(owner.id)).last_login is not None


async def test_wrong_password_and_unknown_email_fail_alike(sql_gateway):
    await CompanyService(sql_gateway).signup(SIGNUP)
    auth = AuthService(sql_gateway)

    with pytest.raises(AuthenticationError) as wrong_password:
        await auth.sign_in("olivia@acme.io", "Wrong1234")
    with pytest.raises(AuthenticationError) as unknown_email:
        await auth.sign_in("nobody@acme.io", "Secret123")

    assert wrong_password.value.message == unknown_email.value.message


async def test_deactivated_user_cannot_sign_in(sql_gateway):
    _, owner = await CompanyService(sql_gateway).signup(SIGNUP)
    await sql_gateway.update_user(owner.id, {"is_active": False})

    with pytest.raises(AuthenticationError, match="deactivated"):
        await AuthService(sql_gateway).sign_in("olivia@acme.io", "Secret123")


async def test_inactive_company_rejects_session(sql_gateway):
    company, owner = await CompanyService(sql_gateway).signup(SIGNUP)
    await sql_gateway.update_company(company.id, {"is_active": False})

    with pytest.raises(AuthenticationError):
        await AuthService(sql_gateway).resolve_session(owner.id)


async def test_reset_password(sql_gateway):
    _, owner = await CompanyService(sql_gateway).signup(SIGNUP)
    auth = AuthService(sql_gateway)
    session = await auth.resolve_session(owner.id)

    with pytest.raises(ValidationError):
        await auth.reset_password(session, "short")

    await auth.reset_password(session, "Another123")
    assert await auth.sign_in("olivia@acme.io", "Another123")


def test_token_round_trip_and_tampering():
    user_id = str(uuid.uuid4())
    token = create_access_token({"sub": user_id})

    assert decode_access_token(token) == user_id
    with pytest.raises(InvalidTokenError):
        decode_access_token(token + "x")
    with pytest.raises(InvalidTokenError, match="expired"):
        decode_access_token(create_access_token({"sub": user_id}, expires_minutes=-1))


async def test_sql_lists_are_scoped_and_newest_first(sql_gateway):
    company, owner = await CompanyService(sql_gateway).signup(SIGNUP)
    other, other_owner = await CompanyService(sql_gateway).signup(
        {**SIGNUP, "company_name": "Globex", "admin_email": "gina@globex.io"}
    )
    owner_session = await AuthService(sql_gateway).resolve_session(owner.id)
    other_session = await AuthService(sql_gateway).resolve_session(other_owner.id)

    service = CertificateService(sql_gateway)
    first = await service.create_certificate({"course_name": "First", "organization": "Org"}, owner_session)
    second = await service.create_certificate({"course_name": "Second", "organization": "Org"}, owner_session)
    await service.create_certificate({"course_name": "Elsewhere", "organization": "Org"}, other_session)

    listed = await sql_gateway.list_certificates(company.id)
    assert [c.id for c in listed] == [second.id, first.id]
    assert await sql_gateway.list_certificates(company.id, user_id=uuid.uuid4()) == []


async def test_sql_list_users_excludes_roles_and_caller(sql_gateway):
    company, owner = await CompanyService(sql_gateway).signup(SIGNUP)
    roles = {r.name: r for r in await sql_gateway.list_roles(company.id)}
    plain = await sql_gateway.create_user({
        "email": "eve@acme.io", "password_hash": "x", "company_id": company.id, "role_id": roles["Employee"].id,
    })
    roleless = await sql_gateway.create_user({
        "email": "nora@acme.io", "password_hash": "x", "company_id": company.id,
    })

    users = await sql_gateway.list_users(company.id, exclude_role_ids=[roles["Owner"].id])

    assert {u.id for u in users} == {plain.id, roleless.id}
    assert owner.id not in {u.id for u in users}


async def test_deleting_user_keeps_certificates(sql_gateway):
    company, owner = await CompanyService(sql_gateway).signup(SIGNUP)
    roles = {r.name: r for r in await sql_gateway.list_roles(company.id)}
    eve = await sql_gateway.create_user({
        "email": "eve@acme.io", "password_hash": "x", "company_id": company.id, "role_id": roles["Employee"].id,
    })
    certificate = await sql_gateway.create_certificate({
        "course_name": "Orphan", "organization": "Org", "user_id": eve.id, "company_id": company.id,
    })

    await sql_gateway.delete_user(eve.id)

    assert await sql_gateway.get_user(eve.id) is None
    assert (await sql_gateway.get_certificate(certificate.id)).user_id == eve.id
