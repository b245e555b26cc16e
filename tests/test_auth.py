"""
Collab client unit tests for the authentication lifecycle
"""

import json
import socket
import unittest as _unittest

from collab_client import TransportError
from collab_client.base import AUTH_TYPE_BEARER, AUTH_TYPE_TOKEN
from collab_client.client import Client

from . import conf, utils


class AuthTests(utils.BaseAPITests):
    def test_login(self):
        client = self.env.create_client()
        self.assertEqual("", client.auth_token)

        user, response = client.login(self.env.basic_user.username, conf.DEFAULT_PASSWORD)
        self.check_no_error(response)
        self.assertEqual(self.env.basic_user.id, user.id)
        self.check_user_sanitization(user)
        self.assertEqual(response.headers.get("Token"), client.auth_token)
        self.assertEqual(AUTH_TYPE_BEARER, client.auth_type)
        self.assertIn(client.auth_token, self.env.state.sessions)

        body = json.loads(self.env.state.last_request("POST", "/users/login").body)
        self.assertEqual({"login_id": self.env.basic_user.username, "password": conf.DEFAULT_PASSWORD}, body)

        user, response = client.login(self.env.basic_user2.email, conf.DEFAULT_PASSWORD)
        self.check_no_error(response)
        self.assertEqual(self.env.basic_user2.id, user.id)
        client.close()

    def test_login_failure_keeps_credentials(self):
        token = self.client.auth_token
        self.assertTrue(token)

        user, response = self.client.login(self.env.basic_user.username, "wrong password")
        self.assertIsNone(user)
        self.check_error_id(response, "api.user.login.invalid_credentials", 401)
        self.assertTrue(response.error.is_unauthorized)
        self.assertEqual(token, self.client.auth_token)
        self.assertEqual(AUTH_TYPE_BEARER, self.client.auth_type)

        user, response = self.client.login("", "")
        self.check_error_id(response, "api.user.login.invalid_credentials", 401)

        user, response = self.client.login("missing@x.com", "wrong")
        self.assertIsNone(user)
        self.check_error_id(response, "api.user.login.invalid_credentials", 401)
        self.assertEqual(token, self.client.auth_token)

        user, response = self.client.get_user(self.env.basic_user.id)
        self.check_no_error(response)

    def test_login_by_id(self):
        client = self.env.create_client()
        user, response = client.login_by_id(self.env.basic_user.id, conf.DEFAULT_PASSWORD)
        self.check_no_error(response)
        self.assertEqual(self.env.basic_user.id, user.id)
        self.assertTrue(client.auth_token)

        body = json.loads(self.env.state.last_request("POST", "/users/login").body)
        self.assertEqual({"id": self.env.basic_user.id, "password": conf.DEFAULT_PASSWORD}, body)

        user, response = client.login_by_id("doesnotexist", conf.DEFAULT_PASSWORD)
        self.assertIsNone(user)
        self.check_error_id(response, "api.user.login.invalid_credentials", 401)
        client.close()

    def test_login_with_device(self):
        client = self.env.create_client()
        user, response = client.login_with_device(self.env.basic_user.email, conf.DEFAULT_PASSWORD, "android:1234")
        self.check_no_error(response)
        self.assertEqual(self.env.basic_user.id, user.id)
        self.assertEqual("android:1234", self.env.state.devices[client.auth_token])
        client.close()

    def test_login_by_ldap(self):
        client = self.env.create_client()
        user, response = client.login_by_ldap(self.env.basic_user.username, conf.DEFAULT_PASSWORD)
        self.assertIsNone(user)
        self.check_error_id(response, "api.user.login_ldap.not_available.app_error", 501)
        self.assertEqual("", client.auth_token)

        body = json.loads(self.env.state.last_request("POST", "/users/login").body)
        self.assertEqual("true", body["ldap_only"])
        client.close()

    def test_logout(self):
        token = self.client.auth_token
        ok, response = self.client.logout()
        self.check_no_error(response)
        self.assertTrue(ok)
        self.assertEqual("", self.client.auth_token)
        self.assertEqual(AUTH_TYPE_BEARER, self.client.auth_type)
        self.assertNotIn(token, self.env.state.sessions)

        user, response = self.client.get_user(self.env.basic_user.id)
        self.assertIsNone(user)
        self.check_error_id(response, "api.context.session_expired.app_error", 401)
        self.assertIsNone(self.env.state.last_request("GET").headers.get("Authorization"))

    def test_logout_failure_clears_credentials(self):
        self.env.state.broken_error_paths.add("/api/v4/users/logout")
        ok, response = self.client.logout()
        self.assertFalse(ok)
        self.check_status(response, 500)
        self.assertEqual("", self.client.auth_token)
        self.assertEqual(AUTH_TYPE_BEARER, self.client.auth_type)

        self.env.state.broken_error_paths.clear()
        self.env.state.garbage_paths.add("/api/v4/users/logout")
        self.env.login_as(self.client, self.env.basic_user)
        ok, response = self.client.logout()
        self.assertFalse(ok)
        self.assertIsNone(response.error)
        self.assertEqual("", self.client.auth_token)

    def test_logout_transport_failure_clears_credentials(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.bind(("127.0.0.1", 0))
            port = sock.getsockname()[1]

        client = Client(f"http://127.0.0.1:{port}", timeout=conf.CLIENT_TIMEOUT)
        client.auth_token = self.client.auth_token
        ok, response = client.logout()
        self.assertFalse(ok)
        self.assertIsInstance(response.error, TransportError)
        self.assertEqual("", client.auth_token)
        self.assertEqual(AUTH_TYPE_BEARER, client.auth_type)
        client.close()


class OAuthTokenTests(utils.BaseAPITests):
    def test_oauth_token(self):
        token = self.env.state.issue_token(self.env.basic_user2.id)
        client = self.env.create_client()
        client.set_oauth_token(token)
        self.assertEqual(AUTH_TYPE_TOKEN, client.auth_type)

        user, response = client.get_user(self.env.basic_user2.id)
        self.check_no_error(response)
        self.assertEqual(self.env.basic_user2.username, user.username)
        self.assertEqual(
            [f"Token {token}"],
            self.env.state.last_request("GET").headers.get_all("Authorization")
        )

        client.clear_oauth_token()
        self.assertEqual("", client.auth_token)
        self.assertEqual(AUTH_TYPE_BEARER, client.auth_type)
        user, response = client.get_user(self.env.basic_user2.id)
        self.check_error_id(response, "api.context.session_expired.app_error", 401)
        client.close()

    def test_login_replaces_oauth_token(self):
        client = self.env.create_client()
        client.set_oauth_token("invalid")
        self.env.login_as(client, self.env.basic_user)
        self.assertEqual(AUTH_TYPE_BEARER, client.auth_type)
        self.assertNotEqual("invalid", client.auth_token)
        client.close()


if __name__ == '__main__':
    _unittest.main()
