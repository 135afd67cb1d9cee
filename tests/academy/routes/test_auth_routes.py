import json

import pytest
from fastapi import HTTPException
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import ValidationError

from academy.auth import jwt_handler
from academy.auth.dependencies import get_current_user, get_identity, require_admin
from academy.auth.passwords import hash_password, verify_password
from academy.core import config
from academy.models.user import User
from academy.routes.auth_routes import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    login,
    me,
    register,
)


def _register(db, email: str = 'learner@example.com', password: str = 's3cret', name: str = 'Learner'):
    return register(RegisterRequest(email=email, password=password, name=name), db=db)


def test_register_request_normalizes_email() -> None:
    request = RegisterRequest(email=' Learner@Example.COM ', password='pw', name=' Learner ')

    assert request.email == 'learner@example.com'
    assert request.name == 'Learner'


@pytest.mark.parametrize('email', ['', 'no-at-sign', '@example.com', 'user@localhost'])
def test_register_request_rejects_invalid_email(email: str) -> None:
    with pytest.raises(ValidationError):
        RegisterRequest(email=email, password='pw', name='Learner')


def test_register_creates_student_with_hashed_password(db) -> None:
    response = _register(db)

    assert isinstance(response, AuthResponse)
    assert response.role == 'student'
    assert response.access_token

    stored = db.query(User).filter(User.email == 'learner@example.com').one()
    assert stored.hashed_password != 's3cret'
    assert verify_password('s3cret', stored.hashed_password)


def test_register_assigns_admin_role_for_configured_email(db, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'ADMIN_EMAILS', {'boss@example.com'})

    response = _register(db, email='Boss@example.com')

    assert response.role == 'admin'


def test_register_rejects_duplicate_email_and_keeps_first_user(db) -> None:
    first = _register(db, name='First')

    response = _register(db, password='other', name='Second')

    assert isinstance(response, JSONResponse)
    assert response.status_code == 400
    assert json.loads(response.body) == {'message': 'Email already registered', 'field': 'email'}

    users = db.query(User).filter(User.email == 'learner@example.com').all()
    assert len(users) == 1
    assert users[0].id == first.id
    assert users[0].name == 'First'
    assert verify_password('s3cret', users[0].hashed_password)


def test_login_returns_user_and_token(db) -> None:
    registered = _register(db)

    response = login(LoginRequest(username=' LEARNER@example.com', password='s3cret'), db=db)

    assert response.id == registered.id
    payload = jwt_handler.decode_access_token(response.access_token)
    assert payload['sub'] == str(registered.id)
    assert 'role' not in payload


@pytest.mark.parametrize(
    ('username', 'password'),
    [
        ('nobody@example.com', 's3cret'),
        ('learner@example.com', 'wrong'),
    ],
)
def test_login_rejects_bad_credentials_with_one_message(db, username: str, password: str) -> None:
    _register(db)

    with pytest.raises(HTTPException) as exception_info:
        login(LoginRequest(username=username, password=password), db=db)

    assert exception_info.value.status_code == 401
    assert exception_info.value.detail == 'Invalid credentials'


def test_get_current_user_resolves_token_subject(db) -> None:
    registered = _register(db)
    credentials = HTTPAuthorizationCredentials(scheme='Bearer', credentials=registered.access_token)

    user = get_current_user(credentials=credentials, db=db)

    assert user.id == registered.id
    assert me(current_user=user) is user


@pytest.mark.parametrize('token', ['garbage', None])
def test_get_current_user_rejects_missing_or_invalid_token(db, token) -> None:
    credentials = None if token is None else HTTPAuthorizationCredentials(scheme='Bearer', credentials=token)

    with pytest.raises(HTTPException) as exception_info:
        get_current_user(credentials=credentials, db=db)

    assert exception_info.value.status_code == 401


def test_get_current_user_rejects_token_for_deleted_user(db) -> None:
    token = jwt_handler.create_access_token(subject='12345')
    credentials = HTTPAuthorizationCredentials(scheme='Bearer', credentials=token)

    with pytest.raises(HTTPException) as exception_info:
        get_current_user(credentials=credentials, db=db)

    assert exception_info.value.detail == 'User not found'


def test_require_admin_rejects_students(student) -> None:
    with pytest.raises(HTTPException) as exception_info:
        require_admin(identity=get_identity(user=student))

    assert exception_info.value.status_code == 401
    assert exception_info.value.detail == 'Admin only'


def test_password_hash_is_salted() -> None:
    assert hash_password('same') != hash_password('same')
    assert not verify_password('same', '')
