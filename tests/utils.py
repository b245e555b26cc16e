"""
Helper functions to make writing unit tests for the collab client easier
"""

import random
import string
import unittest
from typing import Optional

from collab_client import schemas
from collab_client.base import Response
from collab_client.client import Client

from . import conf, server as _server


def random_name(prefix: str, length: int = 10) -> str:
    return prefix + "".join(random.choice(string.ascii_lowercase + string.digits) for _ in range(length))


class TestEnvironment:
    """
    Explicit handle for a running stub server, two clients and the basic fixtures

    Use ``start`` and ``stop`` to control the stub server. The basic fixtures
    are created by ``init_basic``: the first user of the server (which is a
    system admin, logged in with ``system_admin_client``), two basic users
    (where the first one is logged in with ``client``), a team, an open and
    a private channel of that team and a single post in the open channel.
    All entities created by the helper methods use the name prefixes of the
    test config, so that ``teardown`` is able to remove all of them again.
    """

    __test__ = False

    server: _server.StubServer
    client: Optional[Client] = None
    system_admin_client: Optional[Client] = None

    system_admin_user: Optional[schemas.User] = None
    basic_user: Optional[schemas.User] = None
    basic_user2: Optional[schemas.User] = None
    basic_team: Optional[schemas.Team] = None
    basic_channel: Optional[schemas.Channel] = None
    basic_private_channel: Optional[schemas.Channel] = None
    basic_post: Optional[schemas.Post] = None

    def __init__(self):
        self.server = _server.StubServer()

    @property
    def state(self) -> _server.ServerState:
        return self.server.state

    def start(self) -> "TestEnvironment":
        self.server.start()
        self.client = self.create_client()
        self.system_admin_client = self.create_client()
        return self

    def stop(self) -> None:
        for client in (self.client, self.system_admin_client):
            if client is not None:
                client.close()
        self.server.stop()

    def create_client(self, **kwargs) -> Client:
        return Client(self.server.url, timeout=conf.CLIENT_TIMEOUT, **kwargs)

    def init_basic(self) -> "TestEnvironment":
        self.system_admin_user = self.create_user()
        self.login_as(self.system_admin_client, self.system_admin_user)
        self.basic_user = self.create_user()
        self.basic_user2 = self.create_user()
        self.login_as(self.client, self.basic_user)

        self.basic_team = self.create_team()
        self.state.add_team_member(self.basic_team.id, self.basic_user2.id)
        self.basic_channel = self.create_channel(self.basic_team)
        self.basic_private_channel = self.create_channel(self.basic_team, schemas.CHANNEL_PRIVATE)
        self.state.add_channel_member(self.basic_channel.id, self.basic_user2.id)
        self.basic_post = self.create_post(self.basic_channel)
        return self

    def teardown(self) -> None:
        self.state.remove_by_prefix(conf.USER_PREFIX, conf.TEAM_PREFIX, conf.CHANNEL_PREFIX)

    def login_as(self, client: Client, user: schemas.User, password: str = conf.DEFAULT_PASSWORD) -> schemas.User:
        logged_in, response = client.login(user.email, password)
        response.raise_for_error()
        return logged_in

    def create_user(self, client: Optional[Client] = None) -> schemas.User:
        name = random_name(conf.USER_PREFIX)
        user, response = (client or self.client).create_user(schemas.User(
            username=name,
            email=f"success+{name}@{conf.EMAIL_DOMAIN}",
            nickname=f"Corey Hulen {name}",
            first_name=f"f{name}",
            last_name=f"l{name}",
            password=conf.DEFAULT_PASSWORD
        ))
        response.raise_for_error()
        return user

    def create_team(self, client: Optional[Client] = None, team_type: str = schemas.TEAM_OPEN) -> schemas.Team:
        name = random_name(conf.TEAM_PREFIX)
        team, response = (client or self.client).create_team(schemas.Team(
            name=name,
            display_name=f"dn_{name}",
            email=f"success+{name}@{conf.EMAIL_DOMAIN}",
            type=team_type
        ))
        response.raise_for_error()
        return team

    def create_channel(
            self,
            team: schemas.Team,
            channel_type: str = schemas.CHANNEL_OPEN,
            client: Optional[Client] = None
    ) -> schemas.Channel:
        name = random_name(conf.CHANNEL_PREFIX)
        channel, response = (client or self.client).create_channel(schemas.Channel(
            team_id=team.id,
            name=name,
            display_name=f"dn_{name}",
            type=channel_type
        ))
        response.raise_for_error()
        return channel

    def create_post(
            self,
            channel: schemas.Channel,
            message: Optional[str] = None,
            root_id: str = "",
            client: Optional[Client] = None
    ) -> schemas.Post:
        post, response = (client or self.client).create_post(schemas.Post(
            channel_id=channel.id,
            message=message or random_name("zz"),
            root_id=root_id
        ))
        response.raise_for_error()
        return post


class BaseAPITests(unittest.TestCase):
    """
    A base class for unit tests using the stub server and the basic fixtures

    If a subclass needs special setup or teardown functionality, it **MUST**
    call the superclasses setup and teardown methods: the superclass setup
    method at the beginning of the subclass setup method, the superclass
    teardown method at the end of the subclass teardown method.
    """

    init_basic: bool = True
    env: TestEnvironment

    def setUp(self) -> None:
        self.env = TestEnvironment().start()
        self.addCleanup(self.env.stop)
        if self.init_basic:
            self.env.init_basic()

    def tearDown(self) -> None:
        self.env.teardown()

    @property
    def client(self) -> Client:
        return self.env.client

    @property
    def admin_client(self) -> Client:
        return self.env.system_admin_client

    def check_no_error(self, response: Response):
        self.assertIsNone(response.error, response)
        self.assertIsNotNone(response.status_code, response)
        self.assertLess(response.status_code, 300, response)

    def check_status(self, response: Response, status_code: int):
        self.assertEqual(status_code, response.status_code, response.error)

    def check_etag(self, value, response: Response):
        self.assertIsNone(value, "Expected no result for a not-modified response")
        self.check_status(response, 304)
        self.assertIsNone(response.error)
        self.assertTrue(response.not_modified)

    def check_error_id(self, response: Response, error_id: str, status_code: Optional[int] = None):
        self.assertIsNotNone(response.error, f"Expected an error with ID {error_id!r}")
        self.assertEqual(error_id, response.error.id, response.error)
        if status_code is not None:
            self.check_status(response, status_code)

    def check_user_sanitization(self, user: schemas.User):
        self.assertEqual("", user.password, "The password wasn't blanked")
        self.assertFalse(user.auth_data, "The auth data wasn't blanked")
        self.assertEqual("", user.mfa_secret, "The MFA secret wasn't blanked")
        self.assertTrue(user.is_sanitized)
