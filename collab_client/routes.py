"""
Route builder for the resources of the REST API

All routes are relative to the API URL of a client and don't validate
the given IDs or names in any way, which is up to the server.
"""

import urllib.parse
from typing import Any


def get_users_route() -> str:
    return "/users"


def get_user_route(user_id: str) -> str:
    return f"{get_users_route()}/{user_id}"


def get_user_by_username_route(username: str) -> str:
    return f"{get_users_route()}/username/{username}"


def get_user_by_email_route(email: str) -> str:
    return f"{get_users_route()}/email/{email}"


def get_teams_route() -> str:
    return "/teams"


def get_team_route(team_id: str) -> str:
    return f"{get_teams_route()}/{team_id}"


def get_team_member_route(team_id: str, user_id: str) -> str:
    return f"{get_team_route(team_id)}/members/{user_id}"


def get_channels_route() -> str:
    return "/channels"


def get_channel_route(channel_id: str) -> str:
    return f"{get_channels_route()}/{channel_id}"


def get_channel_members_route(channel_id: str) -> str:
    return f"{get_channel_route(channel_id)}/members"


def get_channel_member_route(channel_id: str, user_id: str) -> str:
    return f"{get_channel_members_route(channel_id)}/{user_id}"


def get_posts_route() -> str:
    return "/posts"


def get_post_route(post_id: str) -> str:
    return f"{get_posts_route()}/{post_id}"


def with_query(route: str, **params: Any) -> str:
    """
    Append the keyword arguments as query string to the route, keeping their order

    :param route: any route built by one of the other functions
    :param params: query parameters, where values of ``None`` will be skipped
    :return: route with the (possibly empty) query string
    """

    query = urllib.parse.urlencode([(k, v) for k, v in params.items() if v is not None])
    if not query:
        return route
    return f"{route}?{query}"
