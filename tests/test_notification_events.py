"""Tests for the producer helpers that emit notifications."""

from chattrix.application.use_cases.notifications import (
    EVENT_NEW,
    notify_message_received,
    notify_post_commented,
    notify_post_liked,
    notify_system,
    notify_user_followed,
)


def test_like_notifies_post_author_with_post_reference(service, dispatcher, make_user, make_post):
    author = make_user("ana")
    liker = make_user("bruno")
    post_id = make_post(author)

    notification = notify_post_liked(
        service, post_author_id=author.id, liker_id=liker.id, post_id=post_id
    )

    assert notification.kind == "like"
    assert notification.related_post.id == post_id
    assert dispatcher.named(EVENT_NEW)[0][0] == author.id


def test_liking_own_post_creates_nothing(service, dispatcher, make_user, make_post):
    author = make_user("ana")
    post_id = make_post(author)

    assert (
        notify_post_liked(service, post_author_id=author.id, liker_id=author.id, post_id=post_id)
        is None
    )
    assert service.list_for_recipient(author.id) == []
    assert dispatcher.events == []


def test_comment_content_is_trimmed_to_a_snippet(service, make_user, make_post):
    author = make_user("ana")
    commenter = make_user("bruno")
    post_id = make_post(author)

    notification = notify_post_commented(
        service,
        post_author_id=author.id,
        commenter_id=commenter.id,
        post_id=post_id,
        comment="  great\n shot " + "x" * 300,
    )

    assert notification.kind == "comment"
    assert notification.content.startswith("great shot x")
    assert len(notification.content) == 120
    assert notification.content.endswith("…")


def test_follow_and_message_notifications(service, make_user):
    ana = make_user("ana")
    bruno = make_user("bruno")

    follow = notify_user_followed(service, followed_id=ana.id, follower_id=bruno.id)
    message = notify_message_received(
        service, recipient_id=ana.id, sender_id=bruno.id, text="are you coming?"
    )

    assert follow.kind == "follow"
    assert message.kind == "message"
    assert message.content == "are you coming?"
    assert service.get_unread_count(ana.id) == 2


def test_system_notification_has_no_sender(service, make_user):
    ana = make_user("ana")

    notification = notify_system(service, recipient_id=ana.id, message="Password changed")

    assert notification.kind == "system"
    assert notification.sender is None
    assert notification.content == "Password changed"
