# ============================================================================
# FILE: app/services/community_service.py
# ============================================================================
from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.core.exceptions import ServiceError, NotFoundError, ConflictError
from app.db.models.community import Community, CommunityMember, CommunityRole
from app.schemas.community import CommunityCreate, CommunityUpdate
from app.services.playlist_service import playlist_service
from app.services.user_service import user_service
import logging

logger = logging.getLogger(__name__)

class CommunityService:
    """Service layer for communities, membership and roles"""

    def create_community(self, db: Session, community_data: CommunityCreate, user_id: int) -> Community:
        """Create a community, the creator becomes its leader and only member"""
        if self._name_taken(db, community_data.name):
            raise ConflictError("A community with that name already exists")

        leader = user_service.get_user(db, user_id)
        community = Community(
            name=community_data.name,
            description=community_data.description,
            image_url=community_data.image_url,
            leader=leader,
        )
        community.memberships.append(CommunityMember(user=leader, role=CommunityRole.LEADER))

        try:
            db.add(community)
            db.commit()
            db.refresh(community)
            logger.info(f"Community created: {community.name} led by {user_id}")
            return community
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating community: {e}")
            raise

    def get_community(self, db: Session, community_id: int) -> Community:
        community = db.get(Community, community_id)
        if not community:
            raise NotFoundError(f"Community not found with id: {community_id}")
        return community

    def search_communities(self, db: Session, name: str) -> List[Community]:
        """Case-insensitive name substring search"""
        pattern = f"%{name.strip().lower()}%"
        return db.query(Community).filter(func.lower(Community.name).like(pattern)).order_by(Community.name).all()

    def get_user_communities(self, db: Session, user_id: int) -> List[Community]:
        """Communities the user is a member of"""
        user_service.get_user(db, user_id)
        return db.query(Community).join(Community.memberships).filter(
            CommunityMember.user_id == user_id
        ).order_by(Community.name).all()

    def update_community(self, db: Session, community_id: int, update_data: CommunityUpdate) -> Community:
        community = self.get_community(db, community_id)

        if update_data.name is not None and update_data.name != community.name:
            if self._name_taken(db, update_data.name):
                raise ConflictError("A community with that name already exists")
            community.name = update_data.name
        if update_data.description is not None:
            community.description = update_data.description
        if update_data.image_url is not None:
            community.image_url = update_data.image_url

        db.commit()
        db.refresh(community)
        logger.info(f"Community updated: {community_id}")
        return community

    def delete_community(self, db: Session, community_id: int) -> None:
        community = self.get_community(db, community_id)
        try:
            db.delete(community)
            db.commit()
            logger.info(f"Community deleted: {community_id}")
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting community: {e}")
            raise

    def join_community(self, db: Session, community_id: int, user_id: int) -> None:
        community = self.get_community(db, community_id)
        user = user_service.get_user(db, user_id)

        if community.is_member(user_id):
            raise ConflictError("You are already a member of this community")

        community.memberships.append(CommunityMember(user=user, role=CommunityRole.MEMBER))
        db.commit()
        logger.info(f"User {user_id} joined community {community_id}")

    def leave_community(self, db: Session, community_id: int, user_id: int) -> None:
        community = self.get_community(db, community_id)
        user_service.get_user(db, user_id)

        # Leader check first, the leader is always a member
        if community.leader_id == user_id:
            raise ServiceError("The leader cannot leave the community")

        membership = community.membership_for(user_id)
        if membership is None:
            raise ServiceError("You are not a member of this community")

        community.memberships.remove(membership)
        db.commit()
        logger.info(f"User {user_id} left community {community_id}")

    def set_community_radio(self, db: Session, community_id: int, playlist_id: int) -> Community:
        """Attach an existing playlist as the community radio"""
        community = self.get_community(db, community_id)
        community.radio_playlist = playlist_service.get_playlist(db, playlist_id)
        db.commit()
        db.refresh(community)
        logger.info(f"Community {community_id} radio set to playlist {playlist_id}")
        return community

    def get_members(self, db: Session, community_id: int) -> List[CommunityMember]:
        """Members with their role, leader first"""
        community = self.get_community(db, community_id)
        return sorted(
            community.memberships,
            key=lambda m: (m.role != CommunityRole.LEADER, m.joined_at, m.user_id),
        )

    def membership_status(self, community: Community, user_id: Optional[int]) -> Tuple[bool, Optional[CommunityRole]]:
        if user_id is None:
            return False, None
        membership = community.membership_for(user_id)
        return (True, membership.role) if membership else (False, None)

    def _name_taken(self, db: Session, name: str) -> bool:
        return db.query(Community).filter(Community.name == name).first() is not None

# Create singleton instance
community_service = CommunityService()
