import uuid
from datetime import date

import pytest

from services.certificate_service import CertificateService
from utils.certificates import normalize_status, validate_certificate_input
from services.errors import AuthorizationError, NotFoundError, ValidationError


@pytest.fixture
def company(gateway):
    company = gateway.seed_company("Acme")
    return {
        "company": company,
        "admin": gateway.seed_user(company.id, "admin@acme.io", role="Admin"),
        "e": gateway.seed_user(company.id, "eve@acme.io"),
        "f": gateway.seed_user(company.id, "finn@acme.io"),
    }


def test_normalize_status():
    assert normalize_status("In Progress") == "in-progress"
    assert normalize_status(" COMPLETED ") == "completed"
    assert normalize_status("") is None
    assert normalize_status(None) is None


def test_validate_input_defaults_status_and_drops_ownership_fields():
    cleaned = validate_certificate_input({
        "course_name": " Kubernetes ",
        "organization": "CNCF",
        "user_id": str(uuid.uuid4()),
        "company_id": str(uuid.uuid4()),
        "start_date": "2024-02-01",
    })

    assert cleaned["course_name"] == "Kubernetes"
    assert cleaned["status"] == "in-progress"
    assert cleaned["start_date"] == date(2024, 2, 1)
    assert "user_id" not in cleaned
    assert "company_id" not in cleaned


@pytest.mark.parametrize("data, message", [
    ({"organization": "CNCF"}, "course_name"),
    ({"course_name": "K8s", "organization": "CNCF", "status": "paused"}, "Invalid status"),
    ({"course_name": "K8s", "organization": "CNCF", "course_link": "ftp://x"}, "course_link"),
    ({"course_name": "K8s", "organization": "CNCF",
      "start_date": "2024-05-01", "end_date": "2024-04-01"}, "end_date"),
    ({"course_name": "K8s", "organization": "CNCF", "start_date": "yesterday"}, "ISO date"),
])
def test_validate_input_rejects(data, message):
    with pytest.raises(ValidationError, match=message):
        validate_certificate_input(data)


async def test_non_admin_lists_only_own_certificates(gateway, company):
    gateway.seed_certificate(company["e"], course_name="Mine")
    gateway.seed_certificate(company["f"], course_name="Theirs")

    service = CertificateService(gateway)
    certificates = await service.list_certificates(gateway.session_for(company["e"]))

    assert [c.course_name for c in certificates] == ["Mine"]
    # scoping happens in the gateway query, not after the fact
    assert ("list_certificates", company["company"].id, company["e"].id) in gateway.calls


async def test_admin_lists_company_set_only(gateway, company):
    gateway.seed_certificate(company["e"])
    gateway.seed_certificate(company["f"])
    other = gateway.seed_company("Globex")
    gateway.seed_certificate(gateway.seed_user(other.id, "x@globex.io"))

    certificates = await CertificateService(gateway).list_certificates(gateway.session_for(company["admin"]))

    assert len(certificates) == 2
    assert all(c.company_id == company["company"].id for c in certificates)


async def test_non_admin_create_is_owned_by_caller(gateway, company):
    session = gateway.session_for(company["e"])

    certificate = await CertificateService(gateway).create_certificate(
        {"course_name": "AWS SAA", "organization": "AWS", "user_id": str(company["f"].id)},
        session,
    )

    assert certificate.user_id == company["e"].id
    assert certificate.company_id == company["company"].id


async def test_admin_creates_for_employee_visible_only_to_that_employee(gateway, company):
    service = CertificateService(gateway)

    created = await service.create_certificate(
        {"course_name": "Terraform", "organization": "HashiCorp", "status": "Started",
         "user_id": company["e"].id},
        gateway.session_for(company["admin"]),
    )

    assert created.status == "started"
    assert created.user_id == company["e"].id

    seen_by_e = await service.list_certificates(gateway.session_for(company["e"]))
    seen_by_f = await service.list_certificates(gateway.session_for(company["f"]))
    assert [c.id for c in seen_by_e] == [created.id]
    assert seen_by_f == []


async def test_admin_cannot_create_for_user_of_other_company(gateway, company):
    other = gateway.seed_company("Globex")
    outsider = gateway.seed_user(other.id, "x@globex.io")

    with pytest.raises(ValidationError):
        await CertificateService(gateway).create_certificate(
            {"course_name": "K8s", "organization": "CNCF", "user_id": outsider.id},
            gateway.session_for(company["admin"]),
        )
    assert not gateway.called("create_certificate")


async def test_invalid_input_never_reaches_backend(gateway, company):
    with pytest.raises(ValidationError):
        await CertificateService(gateway).create_certificate(
            {"course_name": "", "organization": "CNCF"},
            gateway.session_for(company["e"]),
        )
    assert gateway.calls == []


async def test_employee_cannot_delete_someone_elses_certificate(gateway, company):
    certificate = gateway.seed_certificate(company["f"])

    with pytest.raises(AuthorizationError):
        await CertificateService(gateway).delete_certificate(certificate.id, gateway.session_for(company["e"]))

    assert not gateway.called("delete_certificate")
    assert certificate.id in gateway.certificates


async def test_employee_updates_own_certificate(gateway, company):
    certificate = gateway.seed_certificate(company["e"], start_date=date(2024, 1, 1))

    updated = await CertificateService(gateway).update_certificate(
        certificate.id, {"status": "completed", "end_date": "2024-03-01"}, gateway.session_for(company["e"])
    )

    assert updated.status == "completed"
    assert updated.end_date == date(2024, 3, 1)


async def test_employee_cannot_update_someone_elses_certificate(gateway, company):
    certificate = gateway.seed_certificate(company["e"], course_name="CKA")

    with pytest.raises(AuthorizationError):
        await CertificateService(gateway).update_certificate(
            certificate.id, {"course_name": "Hijacked"}, gateway.session_for(company["f"])
        )

    assert certificate.course_name == "CKA"
    assert not gateway.called("update_certificate")


async def test_employee_cannot_reassign_own_certificate(gateway, company):
    certificate = gateway.seed_certificate(company["e"])

    updated = await CertificateService(gateway).update_certificate(
        certificate.id, {"status": "completed", "user_id": str(company["f"].id)}, gateway.session_for(company["e"])
    )

    assert updated.user_id == company["e"].id
    assert updated.status == "completed"
    _, _, patch = next(c for c in gateway.calls if c[0] == "update_certificate")
    assert "user_id" not in patch


async def test_admin_reassigns_certificate_within_company(gateway, company):
    certificate = gateway.seed_certificate(company["e"])

    updated = await CertificateService(gateway).update_certificate(
        certificate.id, {"user_id": str(company["f"].id)}, gateway.session_for(company["admin"])
    )

    assert updated.user_id == company["f"].id


async def test_update_checks_dates_against_stored_values(gateway, company):
    certificate = gateway.seed_certificate(company["e"], start_date=date(2024, 6, 1))

    with pytest.raises(ValidationError):
        await CertificateService(gateway).update_certificate(
            certificate.id, {"end_date": "2024-01-01"}, gateway.session_for(company["e"])
        )
    assert not gateway.called("update_certificate")


async def test_other_company_certificate_is_not_found(gateway, company):
    other = gateway.seed_company("Globex")
    foreign = gateway.seed_certificate(gateway.seed_user(other.id, "x@globex.io"))

    with pytest.raises(NotFoundError):
        await CertificateService(gateway).get_certificate(foreign.id, gateway.session_for(company["admin"]))


async def test_admin_deletes_any_company_certificate(gateway, company):
    certificate = gateway.seed_certificate(company["f"])

    await CertificateService(gateway).delete_certificate(certificate.id, gateway.session_for(company["admin"]))

    assert certificate.id not in gateway.certificates
