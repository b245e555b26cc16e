"""
Collab client unit tests
"""

import unittest
from .test_auth import AuthTests, OAuthTokenTests
from .test_channels import ChannelTests
from .test_cli import CLITests
from .test_codec import CodecTests
from .test_executor import ExecutorServerTests, ExecutorTests
from .test_posts import PostTests
from .test_routes import RouteTests
from .test_settings import LoggingFilterTests, SettingsTests
from .test_teams import TeamTests
from .test_users import UserTests


TEST_CLASSES = [
    AuthTests,
    ChannelTests,
    CLITests,
    CodecTests,
    ExecutorServerTests,
    ExecutorTests,
    LoggingFilterTests,
    OAuthTokenTests,
    PostTests,
    RouteTests,
    SettingsTests,
    TeamTests,
    UserTests,
]


def get_suite() -> unittest.TestSuite:
    suite = unittest.TestSuite()
    for cls in TEST_CLASSES:
        for fixture in filter(lambda f: f.startswith("test_"), dir(cls)):
            suite.addTest(cls(fixture))
    return suite
