import pytest
from sqlalchemy import select

from blog_api.core.exceptions import BulkOperationError, InvalidInputError, NotFoundError
from blog_api.crud import crud_comment
from blog_api.models import Comment
from blog_api.schemas.comment import CommentCreate, CommentUpdate
from blog_api.schemas.post import PostCreate
from blog_api.services.comment_service import comment_service
from blog_api.services.post_service import post_service


@pytest.fixture
def post(db, author):
    return post_service.create(
        db,
        post_in=PostCreate(title="Commented Post", content="Body"),
        author_id=author.id,
    )


def _seed_comments(db, post_id, count, status="pending"):
    comments = [
        Comment(post_id=post_id, content=f"Comment {i}", author_name="Guest", status=status)
        for i in range(count)
    ]
    db.add_all(comments)
    db.commit()
    return [c.id for c in comments]


def _statuses(db, ids):
    db.expire_all()
    rows = db.execute(select(Comment.id, Comment.status).where(Comment.id.in_(ids))).all()
    return dict(rows)


def test_create_is_always_pending_and_carries_post_info(db, post):
    comment = comment_service.create(
        db,
        comment_in=CommentCreate.model_validate(
            {"post_id": post.id, "content": "Hi", "author_name": "Guest", "status": "approved"}
        ),
    )

    assert comment.status == "pending"
    assert comment.post.title == "Commented Post"
    assert comment.post.slug == "commented-post"


def test_create_on_missing_post(db):
    with pytest.raises(NotFoundError):
        comment_service.create(
            db,
            comment_in=CommentCreate(post_id="missing", content="Hi", author_name="Guest"),
        )


def test_reply_must_belong_to_the_same_post(db, post, author):
    other = post_service.create(
        db, post_in=PostCreate(title="Other", content="Body"), author_id=author.id
    )
    parent = comment_service.create(
        db, comment_in=CommentCreate(post_id=other.id, content="Hi", author_name="Guest")
    )

    with pytest.raises(InvalidInputError):
        comment_service.create(
            db,
            comment_in=CommentCreate(
                post_id=post.id, content="Reply", author_name="Guest", parent_id=parent.id
            ),
        )
    with pytest.raises(InvalidInputError):
        comment_service.create(
            db,
            comment_in=CommentCreate(
                post_id=post.id, content="Reply", author_name="Guest", parent_id="missing"
            ),
        )


def test_find_all_filters(db, post):
    root = comment_service.create(
        db, comment_in=CommentCreate(post_id=post.id, content="Root", author_name="Alice")
    )
    comment_service.create(
        db,
        comment_in=CommentCreate(
            post_id=post.id, content="Reply", author_name="Bob", parent_id=root.id
        ),
    )
    comment_service.set_approval(db, comment_id=root.id, is_approved=True)

    assert [c.content for c in comment_service.find_all(db, top_level_only=True)] == ["Root"]
    assert [c.content for c in comment_service.find_all(db, parent_id=root.id)] == ["Reply"]
    assert [c.content for c in comment_service.find_all(db, status="approved")] == ["Root"]
    assert len(comment_service.find_all(db, status="all")) == 2
    assert [c.author_name for c in comment_service.find_all(db, search="bob")] == ["Bob"]


def test_find_all_for_admin_paginates(db, post):
    _seed_comments(db, post.id, 45)

    page = comment_service.find_all_for_admin(db, page=3, limit=20)

    assert page.total == 45
    assert page.total_pages == 3
    assert page.page == 3
    assert len(page.data) == 5
    assert page.data[0].post.id == post.id


def test_update_approve_and_remove(db, post):
    comment = comment_service.create(
        db, comment_in=CommentCreate(post_id=post.id, content="Hi", author_name="Guest")
    )

    edited = comment_service.update(db, comment_id=comment.id, comment_in=CommentUpdate(content="Edited"))
    assert edited.content == "Edited"

    approved = comment_service.set_approval(db, comment_id=comment.id, is_approved=True)
    assert approved.status == "approved"
    assert comment_service.count_approved(db, post_id=post.id) == 1

    unapproved = comment_service.set_approval(db, comment_id=comment.id, is_approved=False)
    assert unapproved.status == "pending"

    comment_service.remove(db, comment_id=comment.id)
    with pytest.raises(NotFoundError):
        comment_service.find_one(db, comment_id=comment.id)
    with pytest.raises(NotFoundError):
        comment_service.remove(db, comment_id=comment.id)


def test_bulk_approve_processes_all_chunks(db, post):
    ids = _seed_comments(db, post.id, 250)

    processed = comment_service.bulk_approve(db, comment_ids=ids)

    assert processed == 250
    assert set(_statuses(db, ids).values()) == {"approved"}


def test_bulk_approve_failure_keeps_committed_chunks(db, post, monkeypatch):
    ids = _seed_comments(db, post.id, 250)
    original = crud_comment.set_status_for_ids
    calls = []

    def fail_on_second_chunk(db, *, ids, status):
        calls.append(list(ids))
        if len(calls) == 2:
            raise RuntimeError("connection reset")
        return original(db, ids=ids, status=status)

    monkeypatch.setattr(crud_comment, "set_status_for_ids", fail_on_second_chunk)

    with pytest.raises(BulkOperationError) as exc_info:
        comment_service.bulk_approve(db, comment_ids=ids)

    assert exc_info.value.succeeded == ids[:100]
    assert exc_info.value.failed == ids[100:]
    assert "Failed to approve comments" in str(exc_info.value)

    statuses = _statuses(db, ids)
    assert all(statuses[i] == "approved" for i in ids[:100])
    assert all(statuses[i] == "pending" for i in ids[100:])


def test_bulk_delete(db, post):
    ids = _seed_comments(db, post.id, 150)
    keep = _seed_comments(db, post.id, 1)

    assert comment_service.bulk_action(db, comment_ids=ids, action="delete") == 150
    assert _statuses(db, ids) == {}
    assert list(_statuses(db, keep)) == keep


def test_bulk_action_rejects_bad_input(db):
    with pytest.raises(InvalidInputError):
        comment_service.bulk_action(db, comment_ids=[], action="approve")
    with pytest.raises(InvalidInputError):
        comment_service.bulk_action(db, comment_ids=["a"], action="spam")
