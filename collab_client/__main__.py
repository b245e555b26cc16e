#!/usr/bin/env python3

import os
import sys
import getpass
import argparse
import logging.config
from typing import Any, List, Optional
from collections import OrderedDict

try:
    import ujson as json
except ImportError:
    import json

import pydantic

from collab_client import settings as _settings
from collab_client.base import Response
from collab_client.client import Client


DEFAULT_PER_PAGE = 60


def get_parser(program: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=program)

    parser.add_argument(
        "--config",
        type=str,
        metavar="path",
        help="Use this config file before searching the default config file locations"
    )
    parser.add_argument(
        "--url",
        type=str,
        metavar="url",
        help="Base URL of the server, e.g. 'http://localhost:8065' (overwrite config)"
    )
    parser.add_argument(
        "--login-id",
        type=str,
        metavar="id",
        help="Username or email address to login with (password will be asked interactively if omitted)"
    )
    parser.add_argument(
        "--password",
        type=str,
        metavar="passwd",
        help="Password for the login ID"
    )
    parser.add_argument(
        "--token",
        type=str,
        metavar="token",
        help="Use a pre-issued access token instead of logging in"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result in JSON format instead of human-readable text"
    )
    parser.add_argument(
        "--indent",
        type=int,
        metavar="n",
        help="(JSON-only) Indent the JSON response with n spaces (default: none)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (overwrite config)"
    )

    commands = parser.add_subparsers(
        description="Available sub-commands: init, users*, teams*, posts*",
        dest="command",
        required=True,
        metavar="<command>",
        help="the sub-command to be executed (some have their own subcommands, too)"
    )

    parser_init = commands.add_parser(
        "init",
        description="Create a config file with default settings"
    )
    parser_users = commands.add_parser(
        "users",
        description="Query users of the server"
    )
    parser_teams = commands.add_parser(
        "teams",
        description="Query teams of the server"
    )
    parser_posts = commands.add_parser(
        "posts",
        description="Query posts of the server"
    )

    user_command = parser_users.add_subparsers(
        description="Available actions: show, list",
        dest="action",
        metavar="<action>",
        required=True,
        help="action to perform for users"
    )
    parser_users_show = user_command.add_parser(
        "show",
        description="Show a single user identified by exactly one of ID, username or email"
    )
    parser_users_list = user_command.add_parser(
        "list",
        description="Show a page of users, optionally restricted to a team or channel"
    )

    team_command = parser_teams.add_subparsers(
        description="Available actions: show, for-user",
        dest="action",
        metavar="<action>",
        required=True,
        help="action to perform for teams"
    )
    parser_teams_show = team_command.add_parser(
        "show",
        description="Show a single team"
    )
    parser_teams_for_user = team_command.add_parser(
        "for-user",
        description="Show the teams of a user"
    )

    post_command = parser_posts.add_subparsers(
        description="Available actions: show, channel",
        dest="action",
        metavar="<action>",
        required=True,
        help="action to perform for posts"
    )
    parser_posts_show = post_command.add_parser(
        "show",
        description="Show a single post or its whole thread"
    )
    parser_posts_channel = post_command.add_parser(
        "channel",
        description="Show a page of posts of a channel"
    )

    parser_init.add_argument(
        "--path",
        type=str,
        default=os.path.abspath(_settings.CONFIG_PATHS[0]),
        metavar="p",
        help="Path to the newly created config file"
    )
    parser_init.add_argument(
        "--force",
        action="store_true",
        help="Allow overwriting existing files"
    )

    identifiers = parser_users_show.add_mutually_exclusive_group(required=True)
    identifiers.add_argument("--id", type=str, metavar="ID", help="Unique ID of the user")
    identifiers.add_argument("--username", type=str, metavar="name", help="Username of the user")
    identifiers.add_argument("--email", type=str, metavar="email", help="Email address of the user")

    for p in (parser_users_list, parser_posts_channel):
        p.add_argument(
            "--page",
            type=int,
            default=0,
            metavar="n",
            help="Page to show, starting at 0 (default: 0)"
        )
        p.add_argument(
            "--per-page",
            type=int,
            default=DEFAULT_PER_PAGE,
            metavar="n",
            help=f"Number of entries per page (default: {DEFAULT_PER_PAGE})"
        )

    restrictions = parser_users_list.add_mutually_exclusive_group()
    restrictions.add_argument("--in-team", type=str, metavar="ID", help="Only show users of this team")
    restrictions.add_argument("--in-channel", type=str, metavar="ID", help="Only show users of this channel")

    parser_teams_show.add_argument("identifier", metavar="ID", help="Unique ID of the team")
    parser_teams_for_user.add_argument("identifier", metavar="ID", help="Unique ID of the user")

    parser_posts_show.add_argument("identifier", metavar="ID", help="Unique ID of the post")
    parser_posts_show.add_argument(
        "--thread",
        action="store_true",
        help="Show all posts of the thread the post belongs to"
    )
    parser_posts_channel.add_argument("identifier", metavar="ID", help="Unique ID of the channel")

    return parser


def print_table(objs: List[dict], keys: Optional[List[str]] = None):
    info = OrderedDict()
    if keys:
        for k in keys:
            info[k] = len(k)
    for obj in objs:
        for key in obj:
            if keys and key not in keys:
                continue
            if key not in info:
                info[key] = len(key)
            info[key] = max(len(str(obj.get(key))), info.get(key))
    print(" | ".join([f"{k:<{info[k]}}" for k in info]))
    print("-+-".join(["-" * info[k] for k in info]))
    for obj in objs:
        print(" | ".join([f"{obj.get(k)!s:<{info[k]}}" for k in info]))


def print_result(args: argparse.Namespace, result: Any, keys: List[str]) -> int:
    objs = result if isinstance(result, list) else [result]
    dumped = [obj.model_dump(mode="json") if isinstance(obj, pydantic.BaseModel) else obj for obj in objs]
    if args.json:
        options = {"indent": args.indent} if args.indent is not None else {}
        print(json.dumps(dumped if isinstance(result, list) else dumped[0], **options))
        return 0
    print_table(dumped, keys)
    return 0


def report_failure(response: Response) -> int:
    if response.error is not None:
        print(f"Request failed: {response.error}", file=sys.stderr)
    elif response.decode_error is not None:
        print(f"Unexpected response: {response.decode_error}", file=sys.stderr)
    else:
        print(f"Request failed with status code {response.status_code}", file=sys.stderr)
    return 1


def _setup(args: argparse.Namespace) -> _settings.Settings:
    search_paths = _settings.CONFIG_PATHS[:]
    if args.config:
        _settings.CONFIG_PATHS.insert(0, args.config)
    try:
        settings = _settings.Settings()
    except ValueError:
        print("Ensure that the configuration file is valid. Please correct any errors.", file=sys.stderr)
        raise
    finally:
        _settings.CONFIG_PATHS[:] = search_paths

    if args.debug:
        settings.logging.root["level"] = "DEBUG"
        for handler in settings.logging.handlers:
            settings.logging.handlers[handler]["level"] = "DEBUG"
    logging.config.dictConfig(settings.logging.model_dump())
    return settings


def make_client(args: argparse.Namespace) -> Optional[Client]:
    settings = _setup(args)
    if args.url:
        settings.url = args.url.rstrip("/")
    client = Client.from_settings(settings)

    if args.token:
        client.set_oauth_token(args.token)
    elif args.login_id:
        password = args.password or getpass.getpass()
        _, response = client.login(args.login_id, password)
        if response.error is not None:
            report_failure(response)
            client.close()
            return None
    return client


def init_config(args: argparse.Namespace) -> int:
    if os.path.exists(args.path) and not args.force:
        print(f"File {args.path!r} already exists. Aborting!", file=sys.stderr)
        return 1
    _settings.store_configuration(_settings.get_default_client_config(args.url), args.path)
    print(f"Successfully created the new config file {args.path!r}.")
    return 0


def show_user(args: argparse.Namespace, client: Client) -> int:
    if args.id:
        user, response = client.get_user(args.id)
    elif args.username:
        user, response = client.get_user_by_username(args.username)
    else:
        user, response = client.get_user_by_email(args.email)
    if user is None:
        return report_failure(response)
    return print_result(args, user, ["id", "username", "email", "nickname", "roles"])


def list_users(args: argparse.Namespace, client: Client) -> int:
    if args.in_team:
        users, response = client.get_users_in_team(args.in_team, args.page, args.per_page)
    elif args.in_channel:
        users, response = client.get_users_in_channel(args.in_channel, args.page, args.per_page)
    else:
        users, response = client.get_users(args.page, args.per_page)
    if users is None:
        return report_failure(response)
    return print_result(args, users, ["id", "username", "email", "nickname", "roles"])


def show_team(args: argparse.Namespace, client: Client) -> int:
    team, response = client.get_team(args.identifier)
    if team is None:
        return report_failure(response)
    return print_result(args, team, ["id", "name", "display_name", "type", "email"])


def show_teams_for_user(args: argparse.Namespace, client: Client) -> int:
    teams, response = client.get_teams_for_user(args.identifier)
    if teams is None:
        return report_failure(response)
    return print_result(args, teams, ["id", "name", "display_name", "type", "email"])


def show_post(args: argparse.Namespace, client: Client) -> int:
    if not args.thread:
        post, response = client.get_post(args.identifier)
        if post is None:
            return report_failure(response)
        return print_result(args, post, ["id", "user_id", "channel_id", "message"])

    thread, response = client.get_post_thread(args.identifier)
    if thread is None:
        return report_failure(response)
    return print_result(args, thread.ordered(), ["id", "user_id", "root_id", "message"])


def show_channel_posts(args: argparse.Namespace, client: Client) -> int:
    posts, response = client.get_posts_for_channel(args.identifier, args.page, args.per_page)
    if posts is None:
        return report_failure(response)
    return print_result(args, posts.ordered(), ["id", "user_id", "root_id", "message"])


def main(argv: Optional[List[str]] = None, program: str = "collab_client") -> int:
    args = get_parser(program).parse_args(argv)
    if args.command == "init":
        return init_config(args)

    handler = {
        ("users", "show"): show_user,
        ("users", "list"): list_users,
        ("teams", "show"): show_team,
        ("teams", "for-user"): show_teams_for_user,
        ("posts", "show"): show_post,
        ("posts", "channel"): show_channel_posts
    }[(args.command, args.action)]

    client = make_client(args)
    if client is None:
        return 1
    with client:
        return handler(args, client)


if __name__ == '__main__':
    program_name = sys.argv[0] if not sys.argv[0].endswith("__main__.py") else "collab_client"
    exit(main(sys.argv[1:], program_name))
