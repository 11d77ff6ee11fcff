
# ============================================================================
# FILE: app/db/models/community.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime
from typing import Optional
import enum
from app.db.base import Base

class CommunityRole(str, enum.Enum):
    """Role of a member inside one community"""
    LEADER = "LEADER"
    MEMBER = "MEMBER"

class Community(Base):
    """Named group of users with a leader and an optional radio playlist"""
    __tablename__ = "communities"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    leader_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    radio_playlist_id = Column(Integer, ForeignKey("playlists.id", ondelete="SET NULL"), nullable=True)

    # Relationships
    leader = relationship("User", back_populates="led_communities")
    memberships = relationship("CommunityMember", back_populates="community", cascade="all, delete-orphan")
    radio_playlist = relationship("Playlist", back_populates="radio_communities")
    posts = relationship("Post", back_populates="community", cascade="all, delete-orphan")

    def membership_for(self, user_id: int) -> Optional["CommunityMember"]:
        for membership in self.memberships:
            if membership.user_id == user_id:
                return membership
        return None

    def is_member(self, user_id: int) -> bool:
        return self.membership_for(user_id) is not None

    @property
    def member_count(self) -> int:
        return len(self.memberships)

    def __repr__(self) -> str:
        return f"<Community(id={self.id}, name='{self.name}', leader_id={self.leader_id})>"

class CommunityMember(Base):
    """Association object holding membership and the per-member role"""
    __tablename__ = "community_members"

    community_id = Column(Integer, ForeignKey("communities.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    role = Column(SQLEnum(CommunityRole), nullable=False, default=CommunityRole.MEMBER)
    joined_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    community = relationship("Community", back_populates="memberships")
    user = relationship("User", back_populates="community_memberships")
