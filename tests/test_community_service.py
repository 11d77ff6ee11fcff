# ============================================================================
# FILE: tests/test_community_service.py
# ============================================================================
import pytest

from app.core.exceptions import ServiceError, NotFoundError, ConflictError
from app.db.models.community import CommunityRole
from app.schemas.community import CommunityCreate, CommunityUpdate
from app.schemas.playlist import PlaylistCreate
from app.services.community_service import community_service
from app.services.playlist_service import playlist_service


def _community(db, leader, name="Indie"):
    return community_service.create_community(db, CommunityCreate(name=name, description="Indie lovers"), leader.id)


def test_creator_becomes_leader_and_member(db, make_user):
    leader = make_user("leader")

    community = _community(db, leader)

    assert community.leader_id == leader.id
    assert community.member_count == 1
    assert community.membership_for(leader.id).role == CommunityRole.LEADER


def test_duplicate_name_conflict(db, make_user):
    leader = make_user("leader")
    _community(db, leader)

    with pytest.raises(ConflictError):
        _community(db, leader)


def test_join_and_leave(db, make_user):
    leader = make_user("leader")
    fan = make_user("fan")
    community = _community(db, leader)

    community_service.join_community(db, community.id, fan.id)
    assert community_service.membership_status(community, fan.id) == (True, CommunityRole.MEMBER)
    assert community.member_count == 2

    community_service.leave_community(db, community.id, fan.id)
    assert community_service.membership_status(community, fan.id) == (False, None)
    assert community.member_count == 1


def test_double_join_conflicts_without_changing_members(db, make_user):
    leader = make_user("leader")
    fan = make_user("fan")
    community = _community(db, leader)
    community_service.join_community(db, community.id, fan.id)

    with pytest.raises(ConflictError, match="already a member"):
        community_service.join_community(db, community.id, fan.id)
    assert community_service.get_community(db, community.id).member_count == 2


def test_leader_cannot_leave(db, make_user):
    leader = make_user("leader")
    community = _community(db, leader)

    with pytest.raises(ServiceError, match="leader cannot leave"):
        community_service.leave_community(db, community.id, leader.id)
    assert community.is_member(leader.id)


def test_leave_without_membership_fails(db, make_user):
    leader = make_user("leader")
    stranger = make_user("stranger")
    community = _community(db, leader)

    with pytest.raises(ServiceError, match="not a member"):
        community_service.leave_community(db, community.id, stranger.id)


def test_members_listed_leader_first(db, make_user):
    leader = make_user("leader")
    first = make_user("first")
    second = make_user("second")
    community = _community(db, leader)
    community_service.join_community(db, community.id, first.id)
    community_service.join_community(db, community.id, second.id)

    members = community_service.get_members(db, community.id)

    assert [m.user_id for m in members] == [leader.id, first.id, second.id]
    assert [m.role for m in members] == [CommunityRole.LEADER, CommunityRole.MEMBER, CommunityRole.MEMBER]


def test_search_and_user_communities(db, make_user):
    leader = make_user("leader")
    fan = make_user("fan")
    rock = _community(db, leader, "Classic Rock")
    _community(db, leader, "Jazz Corner")
    community_service.join_community(db, rock.id, fan.id)

    assert [c.name for c in community_service.search_communities(db, "rock")] == ["Classic Rock"]
    assert [c.id for c in community_service.get_user_communities(db, fan.id)] == [rock.id]
    assert len(community_service.get_user_communities(db, leader.id)) == 2


def test_update_community(db, make_user):
    leader = make_user("leader")
    community = _community(db, leader)
    _community(db, leader, "Taken")

    updated = community_service.update_community(db, community.id, CommunityUpdate(description="New"))
    assert updated.description == "New"
    assert updated.name == "Indie"

    with pytest.raises(ConflictError):
        community_service.update_community(db, community.id, CommunityUpdate(name="Taken"))


def test_set_radio_playlist(db, make_user, make_song):
    leader = make_user("leader")
    song = make_song(leader)
    playlist = playlist_service.create_playlist(db, leader.id, PlaylistCreate(name="Radio", song_ids=[song.id]))
    community = _community(db, leader)

    community = community_service.set_community_radio(db, community.id, playlist.id)

    assert community.radio_playlist_id == playlist.id
    with pytest.raises(NotFoundError):
        community_service.set_community_radio(db, community.id, 999)


def test_delete_community(db, make_user):
    leader = make_user("leader")
    community = _community(db, leader)

    community_service.delete_community(db, community.id)

    with pytest.raises(NotFoundError):
        community_service.get_community(db, community.id)
