"""
Collab client schemas for the base system

This module contains schemas for users, teams and their members,
channels and their members as well as posts and lists of posts.
"""

from typing import Dict, List, Optional

import pydantic


__all__ = [
    "CHANNEL_DIRECT",
    "CHANNEL_OPEN",
    "CHANNEL_PRIVATE",
    "TEAM_INVITE",
    "TEAM_OPEN",
    "Channel",
    "ChannelMember",
    "ChannelMembers",
    "Post",
    "PostList",
    "Team",
    "TeamMember",
    "User",
]


TEAM_OPEN = "O"
TEAM_INVITE = "I"

CHANNEL_OPEN = "O"
CHANNEL_PRIVATE = "P"
CHANNEL_DIRECT = "D"


class User(pydantic.BaseModel):
    id: str = ""
    create_at: int = 0
    update_at: int = 0
    delete_at: int = 0
    username: str = ""
    password: str = ""
    auth_data: Optional[str] = None
    auth_service: str = ""
    email: str = ""
    email_verified: bool = False
    nickname: str = ""
    first_name: str = ""
    last_name: str = ""
    position: str = ""
    roles: str = ""
    allow_marketing: bool = False
    props: Dict[str, str] = {}
    notify_props: Dict[str, str] = {}
    last_password_update: int = 0
    last_picture_update: int = 0
    failed_attempts: int = 0
    locale: str = ""
    mfa_active: bool = False
    mfa_secret: str = ""

    @property
    def is_sanitized(self) -> bool:
        """
        Determine whether all secrets of this user have been blanked by the server
        """

        return self.password == "" and not self.auth_data and self.mfa_secret == ""


class Team(pydantic.BaseModel):
    id: str = ""
    create_at: int = 0
    update_at: int = 0
    delete_at: int = 0
    display_name: str = ""
    name: str = ""
    description: str = ""
    email: str = ""
    type: str = ""
    company_name: str = ""
    allowed_domains: str = ""
    invite_id: str = ""
    allow_open_invite: bool = False


class TeamMember(pydantic.BaseModel):
    team_id: str = ""
    user_id: str = ""
    roles: str = ""
    delete_at: int = 0


class Channel(pydantic.BaseModel):
    id: str = ""
    create_at: int = 0
    update_at: int = 0
    delete_at: int = 0
    team_id: str = ""
    type: str = ""
    display_name: str = ""
    name: str = ""
    header: str = ""
    purpose: str = ""
    last_post_at: int = 0
    total_msg_count: int = 0
    extra_update_at: int = 0
    creator_id: str = ""


class ChannelMember(pydantic.BaseModel):
    channel_id: str = ""
    user_id: str = ""
    roles: str = ""
    last_viewed_at: int = 0
    msg_count: int = 0
    mention_count: int = 0
    notify_props: Dict[str, str] = {}
    last_update_at: int = 0


ChannelMembers = List[ChannelMember]


class Post(pydantic.BaseModel):
    id: str = ""
    create_at: int = 0
    update_at: int = 0
    delete_at: int = 0
    user_id: str = ""
    channel_id: str = ""
    root_id: str = ""
    parent_id: str = ""
    original_id: str = ""
    message: str = ""
    type: str = ""
    props: Dict[str, pydantic.JsonValue] = {}
    hashtags: str = ""
    filenames: List[str] = []
    file_ids: List[str] = []
    pending_post_id: str = ""


class PostList(pydantic.BaseModel):
    """
    PostList: ordered collection of posts, e.g. a thread or the posts of a channel

    The field `order` holds the IDs of the posts in display order, while
    the field `posts` maps the IDs to the actual post objects.
    """

    order: List[str] = []
    posts: Dict[str, Post] = {}

    def ordered(self) -> List[Post]:
        return [self.posts[post_id] for post_id in self.order if post_id in self.posts]
