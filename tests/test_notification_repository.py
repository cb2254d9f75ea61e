"""Tests for the SQLAlchemy backed notification repository."""

from __future__ import annotations

from datetime import timedelta

import pytest

from chattrix.domain.entities import Notification
from chattrix.domain.exceptions import (
    NotificationNotFoundError,
    NotificationPersistenceError,
)
from chattrix.infrastructure.repositories import NotificationRepository
from chattrix.utils import now_in_app_timezone


def _notification(recipient_id, *, kind="like", sender_id=None, created_at=None, **extra):
    return Notification(
        id=None,
        recipient_id=recipient_id,
        kind=kind,
        sender_id=sender_id,
        created_at=created_at,
        **extra,
    )


@pytest.fixture()
def repository(session) -> NotificationRepository:
    return NotificationRepository(session)


def test_create_assigns_identity_and_resolves_references(repository, make_user, make_post):
    recipient = make_user("ana")
    sender = make_user("bruno", full_name="Bruno Diaz")
    post_id = make_post(recipient, image_url="https://cdn.example.com/beach.jpg")

    saved = repository.create(
        _notification(
            recipient.id,
            sender_id=sender.id,
            kind="comment",
            content="Nice!",
            related_post_id=post_id,
        )
    )

    assert saved.id is not None
    assert saved.read is False
    assert saved.created_at is not None
    assert saved.sender.username == "bruno"
    assert saved.sender.full_name == "Bruno Diaz"
    assert saved.sender.profile_image == "https://cdn.example.com/bruno.png"
    assert saved.related_post.id == post_id
    assert saved.related_post.image_url == "https://cdn.example.com/beach.jpg"


def test_system_notification_has_no_sender(repository, make_user):
    recipient = make_user("ana")

    saved = repository.create(_notification(recipient.id, kind="system", content="Welcome"))

    assert saved.sender is None
    assert saved.related_post is None


def test_list_is_newest_first_and_capped(repository, make_user):
    recipient = make_user("ana")
    base = now_in_app_timezone() - timedelta(hours=2)
    for minute in range(60):
        repository.create(
            _notification(recipient.id, created_at=base + timedelta(minutes=minute))
        )

    listed = repository.list_for_recipient(recipient.id)

    assert len(listed) == 50
    timestamps = [notification.created_at for notification in listed]
    assert timestamps == sorted(timestamps, reverse=True)
    assert listed[0].created_at == base + timedelta(minutes=59)


def test_list_breaks_timestamp_ties_by_newest_id(repository, make_user):
    recipient = make_user("ana")
    moment = now_in_app_timezone()
    first = repository.create(_notification(recipient.id, created_at=moment))
    second = repository.create(_notification(recipient.id, created_at=moment))

    listed = repository.list_for_recipient(recipient.id)

    assert [n.id for n in listed] == [second.id, first.id]


def test_list_for_unknown_recipient_is_empty(repository):
    assert repository.list_for_recipient(9999) == []
    assert repository.count_unread(9999) == 0


def test_list_only_returns_the_recipients_notifications(repository, make_user):
    ana = make_user("ana")
    bruno = make_user("bruno")
    repository.create(_notification(ana.id))
    repository.create(_notification(bruno.id))

    assert [n.recipient_id for n in repository.list_for_recipient(ana.id)] == [ana.id]


def test_count_unread_matches_unbounded_list(repository, make_user):
    recipient = make_user("ana")
    created = [repository.create(_notification(recipient.id)) for _ in range(55)]
    for notification in created[:7]:
        repository.mark_read(notification.id)

    everything = repository.list_for_recipient(recipient.id, limit=None)

    assert len(everything) == 55
    assert repository.count_unread(recipient.id) == sum(1 for n in everything if not n.read)
    assert repository.count_unread(recipient.id) == 48


def test_mark_read_is_idempotent(repository, make_user):
    recipient = make_user("ana")
    saved = repository.create(_notification(recipient.id))

    assert repository.mark_read(saved.id).read is True
    assert repository.mark_read(saved.id).read is True


def test_mark_read_unknown_id_raises_not_found(repository):
    with pytest.raises(NotificationNotFoundError):
        repository.mark_read(12345)


@pytest.mark.parametrize("notification_id", [0, -1, 2**63, 10**20])
def test_ids_outside_the_key_range_are_not_found(repository, notification_id):
    assert repository.get(notification_id) is None
    with pytest.raises(NotificationNotFoundError):
        repository.mark_read(notification_id)
    with pytest.raises(NotificationNotFoundError):
        repository.delete(notification_id)


def test_mark_read_scoped_to_other_recipient_raises_not_found(repository, make_user):
    ana = make_user("ana")
    bruno = make_user("bruno")
    saved = repository.create(_notification(ana.id))

    with pytest.raises(NotificationNotFoundError):
        repository.mark_read(saved.id, recipient_id=bruno.id)

    assert repository.get(saved.id).read is False


def test_mark_all_read_touches_only_unread_rows(repository, make_user):
    ana = make_user("ana")
    bruno = make_user("bruno")
    first = repository.create(_notification(ana.id))
    repository.create(_notification(ana.id))
    repository.create(_notification(bruno.id))
    repository.mark_read(first.id)

    assert repository.mark_all_read(ana.id) == 1
    assert repository.count_unread(ana.id) == 0
    assert repository.count_unread(bruno.id) == 1
    assert repository.mark_all_read(ana.id) == 0


def test_delete_returns_removed_record_and_is_permanent(repository, make_user):
    recipient = make_user("ana")
    saved = repository.create(_notification(recipient.id, content="bye"))

    removed = repository.delete(saved.id)

    assert removed.id == saved.id
    assert removed.content == "bye"
    assert repository.get(saved.id) is None
    with pytest.raises(NotificationNotFoundError):
        repository.delete(saved.id)
    with pytest.raises(NotificationNotFoundError):
        repository.mark_read(saved.id)


def test_rejected_write_surfaces_as_persistence_error(repository, make_user):
    recipient = make_user("ana")

    with pytest.raises(NotificationPersistenceError):
        repository.create(_notification(recipient.id, kind="poke"))

    # The session stays usable after the rollback.
    assert repository.list_for_recipient(recipient.id) == []
