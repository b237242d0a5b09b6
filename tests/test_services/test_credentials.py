"""Tests for user registration and authentication."""

import pytest

from storagebox.core.exceptions import AuthenticationError, DuplicateError, ValidationError
from storagebox.models.user import User
from storagebox.services import credentials


def test_create_user_stores_hash_not_plaintext(db):
    user = credentials.create_user(db, 'Ann', 'ann@example.com', 'plain-pass')

    stored = db.get(User, user.id)
    assert stored.password_hash != 'plain-pass'
    assert 'plain-pass' not in stored.password_hash
    assert stored.total_storage_used == 0
    assert stored.created_at is not None


def test_create_user_lowercases_email(db):
    user = credentials.create_user(db, 'Ann', '  Ann@Example.COM ', 'plain-pass')

    assert user.email == 'ann@example.com'


@pytest.mark.parametrize('name,email,password', [
    (None, 'a@example.com', 'pw'),
    ('', 'a@example.com', 'pw'),
    ('   ', 'a@example.com', 'pw'),
    ('Ann', None, 'pw'),
    ('Ann', 'a@example.com', None),
    ('Ann', 'a@example.com', ''),
])
def test_create_user_requires_all_fields(db, name, email, password):
    with pytest.raises(ValidationError):
        credentials.create_user(db, name, email, password)

    assert db.query(User).count() == 0


@pytest.mark.parametrize('email', ['no-at-sign', 'a@b', 'two@@example.com', 'sp ace@example.com'])
def test_create_user_rejects_malformed_email(db, email):
    with pytest.raises(ValidationError):
        credentials.create_user(db, 'Ann', email, 'pw')


def test_duplicate_email_rejected_regardless_of_other_fields(db, user):
    with pytest.raises(DuplicateError):
        credentials.create_user(db, 'Someone Else', 'TEST@example.com', 'different')

    assert db.query(User).count() == 1


def test_find_user_by_email_is_case_insensitive(db, user):
    assert credentials.find_user_by_email(db, 'Test@Example.com').id == user.id
    assert credentials.find_user_by_email(db, 'nobody@example.com') is None


def test_find_user_by_id(db, user):
    assert credentials.find_user_by_id(db, user.id).email == 'test@example.com'
    assert credentials.find_user_by_id(db, user.id + 100) is None


def test_authenticate_with_correct_password(db, user):
    assert credentials.authenticate(db, 'test@example.com', 'testpass123').id == user.id


@pytest.mark.parametrize('password', ['wrong', 'testpass1234', 'TESTPASS123'])
def test_authenticate_rejects_other_passwords(db, user, password):
    with pytest.raises(AuthenticationError):
        credentials.authenticate(db, 'test@example.com', password)


def test_authenticate_unknown_email(db):
    with pytest.raises(AuthenticationError):
        credentials.authenticate(db, 'ghost@example.com', 'pw')


def test_authenticate_requires_fields(db):
    with pytest.raises(ValidationError):
        credentials.authenticate(db, '', 'pw')
