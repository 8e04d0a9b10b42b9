from __future__ import annotations

import pytest

from src.worklog_payroll.worklog_payroll.auth.identity import Identity
from src.worklog_payroll.worklog_payroll.core.enums import Role
from src.worklog_payroll.worklog_payroll.core.exceptions import (
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from src.worklog_payroll.worklog_payroll.users.service import UserChanges


def test_signup_creates_user_with_default_rate(container):
    user = container.user_service.signup(name="Park", email="park@example.com", password="longpass1")
    assert user.role == Role.USER
    assert user.hourly_rate == 9000
    assert user.password_hash != "longpass1"


@pytest.mark.parametrize(
    "name,email,password",
    [
        ("", "a@example.com", "longpass1"),
        ("A", "not-an-email", "longpass1"),
        ("A", "a@example.com", "short"),
    ],
)
def test_signup_validation(container, name, email, password):
    with pytest.raises(ValidationError):
        container.user_service.signup(name=name, email=email, password=password)


def test_signup_rejects_duplicate_email(container, employee):
    with pytest.raises(ValidationError):
        container.user_service.signup(name="Kim2", email=employee.email, password="longpass1")


def test_authenticate_same_message_for_wrong_email_and_password(container, employee):
    with pytest.raises(AuthenticationError) as wrong_password:
        container.auth_service.authenticate(employee.email, "nope-nope")
    with pytest.raises(AuthenticationError) as wrong_email:
        container.auth_service.authenticate("ghost@example.com", "kim-pass-1")
    assert str(wrong_password.value) == str(wrong_email.value)

    result = container.auth_service.authenticate(employee.email, "kim-pass-1")
    assert result.user.user_id == employee.user_id
    assert container.token_service.decode(result.token).subject == str(employee.user_id)


def test_create_account_is_admin_only(container, employee_identity, admin_identity):
    with pytest.raises(ForbiddenError):
        container.user_service.create_account(
            actor=employee_identity, name="X", email="x@example.com", password="pw"
        )

    user = container.user_service.create_account(
        actor=admin_identity, name="X", email="x@example.com", password="pw", hourly_rate="9500.7"
    )
    assert user.hourly_rate == 9500


def test_admin_cannot_delete_self(container, admin_identity):
    with pytest.raises(ForbiddenError):
        container.user_service.delete_user(actor=admin_identity, user_id=admin_identity.user_id)


def test_delete_requires_admin_and_existing_user(container, employee, employee_identity, admin_identity):
    with pytest.raises(ForbiddenError):
        container.user_service.delete_user(actor=employee_identity, user_id=employee.user_id)
    with pytest.raises(NotFoundError):
        container.user_service.delete_user(actor=admin_identity, user_id=999)

    container.user_service.delete_user(actor=admin_identity, user_id=employee.user_id)
    assert container.users_repo.get_by_id(employee.user_id) is None


def test_admin_cannot_change_own_role(container, admin_identity):
    with pytest.raises(ForbiddenError):
        container.user_service.update_user(
            actor=admin_identity, user_id=admin_identity.user_id, changes=UserChanges(role=Role.USER)
        )


def test_non_admin_cannot_change_role(container, employee, employee_identity):
    with pytest.raises(ForbiddenError):
        container.user_service.update_user(
            actor=employee_identity, user_id=employee.user_id, changes=UserChanges(role=Role.ADMIN)
        )


def test_admin_can_promote_other_user(container, employee, admin_identity):
    user = container.user_service.update_user(
        actor=admin_identity, user_id=employee.user_id, changes=UserChanges(role=Role.ADMIN)
    )
    assert user.role == Role.ADMIN


def test_self_update_of_profile(container, employee, employee_identity):
    user = container.user_service.update_user(
        actor=employee_identity,
        user_id=employee.user_id,
        changes=UserChanges(name="Kim Min", hourly_rate=None, phone_number="010-0000-0000"),
    )
    assert user.name == "Kim Min"
    assert user.hourly_rate is None
    assert user.phone_number == "010-0000-0000"


def test_update_other_user_forbidden_and_empty_change_set(container, employee, other_employee, employee_identity):
    with pytest.raises(ForbiddenError):
        container.user_service.update_user(
            actor=employee_identity, user_id=other_employee.user_id, changes=UserChanges(name="Y")
        )
    with pytest.raises(ValidationError):
        container.user_service.update_user(actor=employee_identity, user_id=employee.user_id, changes=UserChanges())


def test_email_change_checks_uniqueness(container, employee, other_employee, employee_identity):
    with pytest.raises(ValidationError):
        container.user_service.update_user(
            actor=employee_identity, user_id=employee.user_id, changes=UserChanges(email=other_employee.email)
        )


def test_list_users_admin_only(container, employee, admin_identity):
    identity = Identity(user_id=employee.user_id, role=Role.USER)
    with pytest.raises(ForbiddenError):
        container.user_service.list_users(actor=identity)
    assert len(container.user_service.list_users(actor=admin_identity)) == 2


def test_password_change_enforces_minimum_length(container, employee, employee_identity):
    with pytest.raises(ValidationError):
        container.user_service.update_user(
            actor=employee_identity, user_id=employee.user_id, changes=UserChanges(password="short")
        )

    container.user_service.update_user(
        actor=employee_identity, user_id=employee.user_id, changes=UserChanges(password="a-longer-pass")
    )
    assert container.auth_service.authenticate(employee.email, "a-longer-pass").user.user_id == employee.user_id
