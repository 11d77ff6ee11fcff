# ============================================================================
# FILE: tests/test_post_service.py
# ============================================================================
import pytest

from app.core.exceptions import ServiceError, NotFoundError
from app.db.models.post import PostVote
from app.schemas.community import CommunityCreate
from app.schemas.post import PostCreate, PostUpdate
from app.services.community_service import community_service
from app.services.post_service import post_service
from app.services.user_service import user_service


def _post(db, user, content="hello", **kwargs):
    return post_service.create_post(db, PostCreate(content=content, **kwargs), user.id)


def test_create_post_starts_with_zero_votes(db, make_user):
    ana = make_user("ana")

    post = _post(db, ana)

    assert post.vote_count == 0
    assert post.author.id == ana.id
    assert post.community is None


def test_create_post_with_song(db, make_user, make_song):
    ana = make_user("ana")
    song = make_song(ana, title="Blue")

    post = _post(db, ana, song_id=song.id)
    assert post.song.id == song.id


def test_create_post_with_unknown_song_fails(db, make_user):
    ana = make_user("ana")

    with pytest.raises(NotFoundError):
        _post(db, ana, song_id=404)
    assert ana.posts == []


def test_posting_in_community_requires_membership(db, make_user):
    leader = make_user("leader")
    outsider = make_user("outsider")
    community = community_service.create_community(db, CommunityCreate(name="Jazz"), leader.id)

    with pytest.raises(ServiceError, match="member of the community"):
        _post(db, outsider, community_id=community.id)

    community_service.join_community(db, community.id, outsider.id)
    post = _post(db, outsider, community_id=community.id)
    assert post.community_id == community.id


def test_update_post_keeps_community(db, make_user):
    ana = make_user("ana")
    post = _post(db, ana, content="first")

    updated = post_service.update_post(db, post.id, PostUpdate(content="second"))

    assert updated.content == "second"
    assert updated.community_id is None


def test_vote_sequence_matches_ledger(db, make_user):
    ana = make_user("ana")
    bob = make_user("bob")
    post = _post(db, ana)

    assert post_service.vote_post(db, post.id, bob.id, 1).vote_count == 1
    assert post_service.vote_post(db, post.id, bob.id, -1).vote_count == -1
    assert post_service.vote_post(db, post.id, bob.id, 0).vote_count == 0
    assert db.get(PostVote, (post.id, bob.id)) is None


def test_repeated_same_vote_is_idempotent(db, make_user):
    ana = make_user("ana")
    bob = make_user("bob")
    post = _post(db, ana)

    post_service.vote_post(db, post.id, bob.id, 1)
    post = post_service.vote_post(db, post.id, bob.id, 1)

    assert post.vote_count == 1
    assert post_service.get_user_vote(db, post.id, bob.id) == 1


def test_vote_count_is_sum_of_ledger(db, make_user):
    author = make_user("author")
    voters = [make_user(f"voter{i}") for i in range(4)]
    post = _post(db, author)

    for voter, value in zip(voters, (1, 1, -1, 1)):
        post_service.vote_post(db, post.id, voter.id, value)
    post_service.vote_post(db, post.id, voters[0].id, -1)

    ledger = sum(v.value for v in db.query(PostVote).filter(PostVote.post_id == post.id))
    assert post_service.get_post(db, post.id).vote_count == ledger == 0


def test_invalid_vote_value_changes_nothing(db, make_user):
    ana = make_user("ana")
    post = _post(db, ana)

    with pytest.raises(ServiceError, match="Invalid vote value"):
        post_service.vote_post(db, post.id, ana.id, 2)
    assert post_service.get_post(db, post.id).vote_count == 0


def test_vote_on_missing_post(db, make_user):
    ana = make_user("ana")

    with pytest.raises(NotFoundError):
        post_service.vote_post(db, 999, ana.id, 1)


def test_user_votes_batch(db, make_user):
    ana = make_user("ana")
    bob = make_user("bob")
    first = _post(db, ana, content="one")
    second = _post(db, ana, content="two")
    post_service.vote_post(db, first.id, bob.id, -1)

    assert post_service.get_user_votes(db, [first.id, second.id], bob.id) == {first.id: -1}
    assert post_service.get_user_votes(db, [first.id], None) == {}
    assert post_service.get_user_vote(db, second.id, bob.id) == 0


def test_feed_without_follows_is_popular_listing(db, make_user):
    ana = make_user("ana")
    bob = make_user("bob")
    reader = make_user("reader")
    low = _post(db, ana, content="low")
    high = _post(db, bob, content="high")
    post_service.vote_post(db, high.id, ana.id, 1)

    feed, feed_total = post_service.get_feed_for_user(db, reader.id, 0, 10)
    popular, popular_total = post_service.get_popular_posts(db, 0, 10)

    assert [p.id for p in feed] == [p.id for p in popular] == [high.id, low.id]
    assert feed_total == popular_total == 2


def test_feed_only_contains_followed_authors(db, make_user):
    ana = make_user("ana")
    bob = make_user("bob")
    reader = make_user("reader")
    first = _post(db, ana, content="first")
    _post(db, bob, content="not followed")
    second = _post(db, ana, content="second")
    user_service.follow_user(db, reader.id, ana.id)

    feed, total = post_service.get_feed_for_user(db, reader.id, 0, 10)

    assert [p.id for p in feed] == [second.id, first.id]
    assert total == 2


def test_feed_pagination(db, make_user):
    ana = make_user("ana")
    reader = make_user("reader")
    posts = [_post(db, ana, content=f"post {i}") for i in range(5)]
    user_service.follow_user(db, reader.id, ana.id)

    page, total = post_service.get_feed_for_user(db, reader.id, 1, 2)

    assert total == 5
    assert [p.id for p in page] == [posts[2].id, posts[1].id]


def test_community_and_user_listings(db, make_user):
    leader = make_user("leader")
    community = community_service.create_community(db, CommunityCreate(name="Metal"), leader.id)
    inside = _post(db, leader, community_id=community.id)
    outside = _post(db, leader)

    community_posts, _ = post_service.get_community_posts(db, community.id, 0, 10)
    user_posts, total = post_service.get_user_posts(db, leader.id, 0, 10)

    assert [p.id for p in community_posts] == [inside.id]
    assert [p.id for p in user_posts] == [outside.id, inside.id]
    assert total == 2


def test_delete_post_removes_votes(db, make_user):
    ana = make_user("ana")
    bob = make_user("bob")
    post = _post(db, ana)
    post_service.vote_post(db, post.id, bob.id, 1)

    post_service.delete_post(db, post.id)

    assert db.query(PostVote).count() == 0
    with pytest.raises(NotFoundError):
        post_service.get_post(db, post.id)


def test_deleting_voter_takes_votes_out_of_totals(db, make_user):
    ana = make_user("ana")
    bob = make_user("bob")
    carl = make_user("carl")
    post = _post(db, ana)
    own_post = _post(db, bob, content="bob's own")
    post_service.vote_post(db, post.id, bob.id, 1)
    post_service.vote_post(db, post.id, carl.id, -1)
    post_service.vote_post(db, post.id, ana.id, 1)
    post_service.vote_post(db, own_post.id, ana.id, 1)

    user_service.delete_user(db, bob.id)

    remaining = db.query(PostVote).filter(PostVote.post_id == post.id).all()
    assert post_service.get_post(db, post.id).vote_count == sum(v.value for v in remaining) == 0
    with pytest.raises(NotFoundError):
        post_service.get_post(db, own_post.id)
