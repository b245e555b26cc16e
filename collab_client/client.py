"""
Collab client resource operations

Every operation is composed of the route builder, the envelope codec and
the request executor and returns a tuple of the typed result and the
``Response`` metadata of the call. The result is ``None`` (or ``False``
for boolean operations) if the call failed, or if the server answered
a conditional request with 304 (Not Modified).
"""

import logging
from typing import List, Optional, Sequence, Tuple

from . import codec, routes, schemas
from .schemas import config
from .base import AUTH_TYPE_BEARER, HEADER_TOKEN, BaseClient, Response


logger = logging.getLogger(__name__)


class Client(BaseClient):
    """
    Client for the v4 REST API of the collaboration platform

    The client starts without credentials. Use one of the login methods to
    authenticate with a username/email and password, which stores the session
    token of the server in the client, or use ``set_oauth_token`` for tokens
    that were issued by other means. Every request afterwards carries exactly
    one ``Authorization`` header until ``logout`` has been called.
    """

    @classmethod
    def from_settings(cls, settings: config.ClientConfig) -> "Client":
        """
        Create a new client based on the given settings object

        :param settings: instance of ``collab_client.settings.Settings`` or its base config schema
        :return: new client without credentials
        """

        return cls(settings.url, timeout=settings.timeout, strict_decoding=settings.strict_decoding)

    # Authentication section

    def login(self, login_id: str, password: str) -> Tuple[Optional[schemas.User], Response]:
        """
        Authenticate a user by login ID (username, email or SSO identifier) and password
        """

        return self._login(schemas.LoginRequest(login_id=login_id, password=password))

    def login_by_id(self, user_id: str, password: str) -> Tuple[Optional[schemas.User], Response]:
        return self._login(schemas.LoginRequest(id=user_id, password=password))

    def login_by_ldap(self, login_id: str, password: str) -> Tuple[Optional[schemas.User], Response]:
        return self._login(schemas.LoginRequest(login_id=login_id, password=password, ldap_only=True))

    def login_with_device(
            self,
            login_id: str,
            password: str,
            device_id: str
    ) -> Tuple[Optional[schemas.User], Response]:
        """
        Authenticate a user and attach the given device ID to the new session
        """

        return self._login(schemas.LoginRequest(login_id=login_id, password=password, device_id=device_id))

    def _login(self, body: schemas.LoginRequest) -> Tuple[Optional[schemas.User], Response]:
        path = f"{routes.get_users_route()}/login"
        raw, response = self.do_api_post(path, codec.to_json(body, exclude_none=True))
        if response.error is not None:
            return None, response

        self.auth_token = response.headers.get(HEADER_TOKEN, "")
        self.auth_type = AUTH_TYPE_BEARER
        if not self.auth_token:
            logger.warning(f"Successful login response (request ID {response.request_id!r}) had no session token")
        return self._typed(raw, response, schemas.User, path), response

    def logout(self) -> Tuple[bool, Response]:
        """
        Terminate the current session of the user

        The credentials of the client are cleared, even if the call failed.
        """

        path = f"{routes.get_users_route()}/logout"
        raw, response = self.do_api_post(path)
        self._reset_credentials()
        return self._status_ok(raw, response, path), response

    # User section

    def create_user(self, user: schemas.User) -> Tuple[Optional[schemas.User], Response]:
        path = routes.get_users_route()
        raw, response = self.do_api_post(path, codec.to_json(user))
        return self._typed(raw, response, schemas.User, path), response

    def get_user(self, user_id: str, etag: str = "") -> Tuple[Optional[schemas.User], Response]:
        path = routes.get_user_route(user_id)
        raw, response = self.do_api_get(path, etag)
        return self._typed(raw, response, schemas.User, path), response

    def get_user_by_username(self, username: str, etag: str = "") -> Tuple[Optional[schemas.User], Response]:
        path = routes.get_user_by_username_route(username)
        raw, response = self.do_api_get(path, etag)
        return self._typed(raw, response, schemas.User, path), response

    def get_user_by_email(self, email: str, etag: str = "") -> Tuple[Optional[schemas.User], Response]:
        path = routes.get_user_by_email_route(email)
        raw, response = self.do_api_get(path, etag)
        return self._typed(raw, response, schemas.User, path), response

    def get_users(self, page: int, per_page: int, etag: str = "") -> Tuple[Optional[List[schemas.User]], Response]:
        """
        Return a page of users on the system, where page counting starts at 0
        """

        return self._get_user_list(etag, page=page, per_page=per_page)

    def get_users_in_team(
            self,
            team_id: str,
            page: int,
            per_page: int,
            etag: str = ""
    ) -> Tuple[Optional[List[schemas.User]], Response]:
        return self._get_user_list(etag, in_team=team_id, page=page, per_page=per_page)

    def get_users_in_channel(
            self,
            channel_id: str,
            page: int,
            per_page: int,
            etag: str = ""
    ) -> Tuple[Optional[List[schemas.User]], Response]:
        return self._get_user_list(etag, in_channel=channel_id, page=page, per_page=per_page)

    def get_users_not_in_channel(
            self,
            team_id: str,
            channel_id: str,
            page: int,
            per_page: int,
            etag: str = ""
    ) -> Tuple[Optional[List[schemas.User]], Response]:
        return self._get_user_list(etag, in_team=team_id, not_in_channel=channel_id, page=page, per_page=per_page)

    def _get_user_list(self, etag: str, **query) -> Tuple[Optional[List[schemas.User]], Response]:
        path = routes.with_query(routes.get_users_route(), **query)
        raw, response = self.do_api_get(path, etag)
        return self._typed(raw, response, List[schemas.User], path), response

    def get_users_by_ids(self, user_ids: Sequence[str]) -> Tuple[Optional[List[schemas.User]], Response]:
        path = f"{routes.get_users_route()}/ids"
        raw, response = self.do_api_post(path, codec.array_to_json(user_ids))
        return self._typed(raw, response, List[schemas.User], path), response

    def update_user(self, user: schemas.User) -> Tuple[Optional[schemas.User], Response]:
        path = routes.get_user_route(user.id)
        raw, response = self.do_api_put(path, codec.to_json(user))
        return self._typed(raw, response, schemas.User, path), response

    def update_user_password(self, user_id: str, current_password: str, new_password: str) -> Tuple[bool, Response]:
        """
        Update the password of a user, which requires the session of this user or a system admin
        """

        body = schemas.PasswordUpdateRequest(current_password=current_password, new_password=new_password)
        path = f"{routes.get_user_route(user_id)}/password"
        raw, response = self.do_api_put(path, codec.to_json(body))
        return self._status_ok(raw, response, path), response

    def update_user_roles(self, user_id: str, roles: str) -> Tuple[bool, Response]:
        """
        Update the space-separated roles of a user (e.g. ``system_user system_admin``)
        """

        body = schemas.RolesUpdateRequest(roles=roles)
        path = f"{routes.get_user_route(user_id)}/roles"
        raw, response = self.do_api_put(path, codec.to_json(body))
        return self._status_ok(raw, response, path), response

    def delete_user(self, user_id: str) -> Tuple[bool, Response]:
        """
        Deactivate the user on the server
        """

        path = routes.get_user_route(user_id)
        raw, response = self.do_api_delete(path)
        return self._status_ok(raw, response, path), response

    def send_password_reset_email(self, email: str) -> Tuple[bool, Response]:
        body = schemas.PasswordResetSendRequest(email=email)
        path = f"{routes.get_users_route()}/password/reset/send"
        raw, response = self.do_api_post(path, codec.to_json(body))
        return self._status_ok(raw, response, path), response

    def reset_password(self, code: str, new_password: str) -> Tuple[bool, Response]:
        """
        Use the recovery code of a password reset email to set a new password
        """

        body = schemas.PasswordResetRequest(code=code, new_password=new_password)
        path = f"{routes.get_users_route()}/password/reset"
        raw, response = self.do_api_post(path, codec.to_json(body))
        return self._status_ok(raw, response, path), response

    # Team section

    def create_team(self, team: schemas.Team) -> Tuple[Optional[schemas.Team], Response]:
        path = routes.get_teams_route()
        raw, response = self.do_api_post(path, codec.to_json(team))
        return self._typed(raw, response, schemas.Team, path), response

    def get_team(self, team_id: str, etag: str = "") -> Tuple[Optional[schemas.Team], Response]:
        path = routes.get_team_route(team_id)
        raw, response = self.do_api_get(path, etag)
        return self._typed(raw, response, schemas.Team, path), response

    def get_teams_for_user(self, user_id: str, etag: str = "") -> Tuple[Optional[List[schemas.Team]], Response]:
        """
        Return the teams of a user, which requires the session of this user or a system admin
        """

        path = f"{routes.get_user_route(user_id)}/teams"
        raw, response = self.do_api_get(path, etag)
        return self._typed(raw, response, List[schemas.Team], path), response

    def get_team_member(
            self,
            team_id: str,
            user_id: str,
            etag: str = ""
    ) -> Tuple[Optional[schemas.TeamMember], Response]:
        path = routes.get_team_member_route(team_id, user_id)
        raw, response = self.do_api_get(path, etag)
        return self._typed(raw, response, schemas.TeamMember, path), response

    # Channel section

    def create_channel(self, channel: schemas.Channel) -> Tuple[Optional[schemas.Channel], Response]:
        path = routes.get_channels_route()
        raw, response = self.do_api_post(path, codec.to_json(channel))
        return self._typed(raw, response, schemas.Channel, path), response

    def create_direct_channel(self, user_id1: str, user_id2: str) -> Tuple[Optional[schemas.Channel], Response]:
        path = f"{routes.get_channels_route()}/direct"
        raw, response = self.do_api_post(path, codec.array_to_json([user_id1, user_id2]))
        return self._typed(raw, response, schemas.Channel, path), response

    def get_channel_members(
            self,
            channel_id: str,
            page: int,
            per_page: int,
            etag: str = ""
    ) -> Tuple[Optional[schemas.ChannelMembers], Response]:
        path = routes.with_query(routes.get_channel_members_route(channel_id), page=page, per_page=per_page)
        raw, response = self.do_api_get(path, etag)
        return self._typed(raw, response, schemas.ChannelMembers, path), response

    def get_channel_member(
            self,
            channel_id: str,
            user_id: str,
            etag: str = ""
    ) -> Tuple[Optional[schemas.ChannelMember], Response]:
        path = routes.get_channel_member_route(channel_id, user_id)
        raw, response = self.do_api_get(path, etag)
        return self._typed(raw, response, schemas.ChannelMember, path), response

    def get_channel_members_for_user(
            self,
            user_id: str,
            team_id: str,
            etag: str = ""
    ) -> Tuple[Optional[schemas.ChannelMembers], Response]:
        """
        Return all channel memberships of a user on a team
        """

        path = f"{routes.get_user_route(user_id)}/teams/{team_id}/channels/members"
        raw, response = self.do_api_get(path, etag)
        return self._typed(raw, response, schemas.ChannelMembers, path), response

    # Post section

    def create_post(self, post: schemas.Post) -> Tuple[Optional[schemas.Post], Response]:
        path = routes.get_posts_route()
        raw, response = self.do_api_post(path, codec.to_json(post))
        return self._typed(raw, response, schemas.Post, path), response

    def get_post(self, post_id: str, etag: str = "") -> Tuple[Optional[schemas.Post], Response]:
        path = routes.get_post_route(post_id)
        raw, response = self.do_api_get(path, etag)
        return self._typed(raw, response, schemas.Post, path), response

    def get_post_thread(self, post_id: str, etag: str = "") -> Tuple[Optional[schemas.PostList], Response]:
        """
        Return the post together with all other posts in the same thread
        """

        path = f"{routes.get_post_route(post_id)}/thread"
        raw, response = self.do_api_get(path, etag)
        return self._typed(raw, response, schemas.PostList, path), response

    def get_posts_for_channel(
            self,
            channel_id: str,
            page: int,
            per_page: int,
            etag: str = ""
    ) -> Tuple[Optional[schemas.PostList], Response]:
        """
        Return a page of posts of a channel, where page counting starts at 0
        """

        path = routes.with_query(f"{routes.get_channel_route(channel_id)}/posts", page=page, per_page=per_page)
        raw, response = self.do_api_get(path, etag)
        return self._typed(raw, response, schemas.PostList, path), response
