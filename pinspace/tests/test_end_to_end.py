"""End-to-end tests of the JSON interface, against an in-memory database."""

import io
import os
import tempfile
import shutil
from unittest import TestCase, mock

from werkzeug.http import parse_cookie

from ..factory import create_web_app
from ..services import sessions
from .util import create_test_app, SECRET


def _set_cookie(response, name='token'):
    """The ``Set-Cookie`` header for ``name``, if any."""
    for header in response.headers.getlist('Set-Cookie'):
        if header.startswith(f'{name}='):
            return header
    return None


def _cookie_value(response, name='token'):
    return parse_cookie(_set_cookie(response, name)).get(name)


class EndToEndTestCase(TestCase):
    """Base class with a fresh app for each test."""

    def setUp(self):
        self.workdir = tempfile.mkdtemp()
        self.app = self.create_app()
        self.client = self.app.test_client()

    def tearDown(self):
        shutil.rmtree(self.workdir)

    def create_app(self, **overrides):
        return create_test_app(os.path.join(self.workdir, 'uploads'),
                               **overrides)

    def register(self, username, email, password='secret1', **extra):
        data = {'username': username, 'email': email, 'password': password}
        data.update(extra)
        return self.client.post('/users/register', json=data)

    def login(self, email, password='secret1'):
        return self.client.post('/users/login',
                                json={'email': email, 'password': password})


class TestRegisterLoginAndFollow(EndToEndTestCase):
    """The main flow: two users sign up and one follows the other."""

    def test_flow(self):
        """Register, log in, view a profile, follow and unfollow."""
        response = self.register('ana', 'a@x.com', displayName='Ana')
        self.assertEqual(response.status_code, 201)
        data = response.get_json()
        self.assertEqual(data['username'], 'ana')
        self.assertEqual(data['displayName'], 'Ana')
        self.assertEqual(data['email'], 'a@x.com')
        self.assertIsNone(data['img'])
        self.assertIsInstance(data['_id'], int)
        self.assertNotIn('password', data)
        self.assertNotIn('passwordHash', data)
        self.assertIsNotNone(_set_cookie(response),
                             'Registration logs the user in')
        ana_id = data['_id']

        response = self.login('a@x.com')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['_id'], ana_id)
        token = _cookie_value(response)
        with self.app.app_context():
            self.assertEqual(sessions.verify_session(token), ana_id)

        response = self.client.get('/users/ana')
        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertEqual(data['followerCount'], 0)
        self.assertEqual(data['followingCount'], 0)
        self.assertFalse(data['isFollowing'])

        # Ben signs up, which replaces Ana's cookie in the client.
        response = self.register('ben', 'b@x.com')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.get_json()['displayName'], 'ben')

        response = self.client.post('/users/ana/follow')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), {'message': 'Successful'})

        data = self.client.get('/users/ana').get_json()
        self.assertEqual(data['followerCount'], 1)
        self.assertTrue(data['isFollowing'])
        data = self.client.get('/users/ben').get_json()
        self.assertEqual(data['followingCount'], 1)
        self.assertEqual(data['followerCount'], 0)

        response = self.client.post('/users/ana/follow')
        self.assertEqual(response.status_code, 200)
        data = self.client.get('/users/ana').get_json()
        self.assertEqual(data['followerCount'], 0)
        self.assertFalse(data['isFollowing'])

    def test_form_encoded(self):
        """Form-encoded bodies work as well as JSON."""
        response = self.client.post('/users/register', data={
            'username': 'ana', 'email': 'a@x.com', 'password': 'secret1'
        })
        self.assertEqual(response.status_code, 201)
        response = self.client.post('/users/login', data={
            'email': 'a@x.com', 'password': 'secret1'
        })
        self.assertEqual(response.status_code, 200)


class TestRegistrationErrors(EndToEndTestCase):
    """Registration failures are reported as JSON 400s."""

    def test_missing_fields(self):
        """Each required field must be present and non-empty."""
        for data in [{'email': 'a@x.com', 'password': 'x'},
                     {'username': 'ana', 'password': 'x'},
                     {'username': 'ana', 'email': 'a@x.com'},
                     {'username': '', 'email': 'a@x.com', 'password': 'x'}]:
            response = self.client.post('/users/register', json=data)
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.get_json(),
                             {'message': 'All fields are required!'})

    def test_duplicates(self):
        """Emails and usernames are unique."""
        self.register('ana', 'a@x.com')
        response = self.register('other', 'a@x.com')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()['message'],
                         'Email is already in use.')
        response = self.register('ana', 'other@x.com')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()['message'],
                         'Username is already taken.')

    def test_server_error(self):
        """Unexpected failures get a generic message."""
        with mock.patch('pinspace.controllers.registration.users') as users:
            users.register.side_effect = RuntimeError('disk full')
            response = self.register('ana', 'a@x.com')
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.get_json(),
                         {'message': 'Server error. Please try again later.'})


class TestLogin(EndToEndTestCase):
    """Login failures don't reveal which accounts exist."""

    def setUp(self):
        super(TestLogin, self).setUp()
        self.register('ana', 'a@x.com')
        self.client.post('/users/logout')

    def test_wrong_password_and_unknown_email(self):
        """Both failures look identical."""
        wrong_password = self.login('a@x.com', 'nope')
        unknown_email = self.login('z@x.com', 'secret1')
        self.assertEqual(wrong_password.status_code, 401)
        self.assertEqual(unknown_email.status_code, 401)
        self.assertEqual(wrong_password.get_json(), unknown_email.get_json())
        self.assertEqual(wrong_password.get_json(),
                         {'message': 'Invalid email or password'})
        self.assertIsNone(_set_cookie(wrong_password))

    def test_missing_fields(self):
        """Email and password are required."""
        response = self.client.post('/users/login', json={'email': 'a@x.com'})
        self.assertEqual(response.status_code, 400)

    def test_logout(self):
        """Logout expires the cookie."""
        self.login('a@x.com')
        response = self.client.post('/users/logout')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), {'message': 'Logout successful'})
        self.assertIn('Max-Age=0', _set_cookie(response))
        response = self.client.post('/users/ana/follow')
        self.assertEqual(response.status_code, 401)


class TestProfileErrors(EndToEndTestCase):
    """Error cases for profiles and following."""

    def test_unknown_user(self):
        """Unknown profiles are a 404."""
        response = self.client.get('/users/nobody')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json(), {'message': 'User not found'})

    def test_follow_anonymously(self):
        """Following requires a session."""
        self.register('ana', 'a@x.com')
        self.client.post('/users/logout')
        response = self.client.post('/users/ana/follow')
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.get_json(), {'message': 'Not authenticated!'})

    def test_follow_with_bad_token(self):
        """A forged token is the same as no token."""
        self.register('ana', 'a@x.com')
        self.client.set_cookie('token', 'not.a.token')
        response = self.client.post('/users/ana/follow')
        self.assertEqual(response.status_code, 401)

    def test_follow_unknown_user(self):
        """Can't follow someone who doesn't exist."""
        self.register('ana', 'a@x.com')
        response = self.client.post('/users/nobody/follow')
        self.assertEqual(response.status_code, 404)

    def test_follow_self(self):
        """Nobody can follow themselves."""
        self.register('ana', 'a@x.com')
        response = self.client.post('/users/ana/follow')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json(),
                         {'message': 'You cannot follow yourself.'})
        data = self.client.get('/users/ana').get_json()
        self.assertEqual(data['followerCount'], 0)


class TestCookies(EndToEndTestCase):
    """Session cookie attributes."""

    def test_lax_cookie(self):
        """In development the cookie is HttpOnly and SameSite=Lax."""
        cookie = _set_cookie(self.register('ana', 'a@x.com'))
        self.assertIn('HttpOnly', cookie)
        self.assertIn('SameSite=Lax', cookie)
        self.assertNotIn('Secure', cookie)
        self.assertIn(f'Max-Age={30 * 24 * 60 * 60}', cookie)

    def test_secure_cookie(self):
        """Secure cookies can be sent cross-site."""
        self.app = self.create_app(AUTH_SESSION_COOKIE_SECURE=True)
        self.client = self.app.test_client()
        cookie = _set_cookie(self.register('ana', 'a@x.com'))
        self.assertIn('HttpOnly', cookie)
        self.assertIn('Secure', cookie)
        self.assertIn('SameSite=None', cookie)

    def test_cookie_name(self):
        """The cookie name is configurable."""
        self.app = self.create_app(AUTH_SESSION_COOKIE_NAME='pinspace_auth')
        self.client = self.app.test_client()
        response = self.register('ana', 'a@x.com')
        self.assertIsNotNone(_set_cookie(response, 'pinspace_auth'))
        self.assertIsNone(_set_cookie(response, 'token'))


class TestProfileImage(EndToEndTestCase):
    """Profile images are uploaded with registration and served back."""

    def test_upload(self):
        """A multipart registration stores the image."""
        response = self.client.post('/users/register', data={
            'username': 'ana', 'email': 'a@x.com', 'password': 'secret1',
            'img': (io.BytesIO(b'\x89PNG fake'), 'me.png')
        }, content_type='multipart/form-data')
        self.assertEqual(response.status_code, 201)
        img = response.get_json()['img']
        self.assertTrue(img.startswith('/uploads/'))
        self.assertTrue(img.endswith('.png'))

        response = self.client.get(img)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, b'\x89PNG fake')
        response.close()

        response = self.login('a@x.com')
        self.assertEqual(response.get_json()['img'], img)

    def test_not_an_image(self):
        """Other kinds of file are refused, and no account is created."""
        response = self.client.post('/users/register', data={
            'username': 'ana', 'email': 'a@x.com', 'password': 'secret1',
            'img': (io.BytesIO(b'MZ'), 'me.exe')
        }, content_type='multipart/form-data')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.client.get('/users/ana').status_code, 404)


class TestApplication(EndToEndTestCase):
    """Application-wide behavior."""

    def test_auth_status(self):
        """The health check answers without a session."""
        response = self.client.get('/auth_status')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, b'OK')

    def test_cors(self):
        """The configured client may make credentialed requests."""
        self.app = self.create_app(CLIENT_URL='http://localhost:3000')
        self.client = self.app.test_client()
        response = self.client.get('/auth_status')
        self.assertEqual(response.headers['Access-Control-Allow-Origin'],
                         'http://localhost:3000')
        self.assertEqual(
            response.headers['Access-Control-Allow-Credentials'], 'true'
        )

    def test_no_cors_by_default(self):
        """Without a client URL no cross-origin access is granted."""
        response = self.client.get('/auth_status')
        self.assertNotIn('Access-Control-Allow-Origin', response.headers)

    def test_method_not_allowed(self):
        """Errors are JSON too."""
        self.register('ana', 'a@x.com')
        response = self.client.get('/users/ana/follow')
        self.assertEqual(response.status_code, 405)
        self.assertIn('message', response.get_json())
        data = self.client.get('/users/ana').get_json()
        self.assertEqual(data['followerCount'], 0)

    def test_requires_secret(self):
        """The app won't start without a signing secret."""
        with self.assertRaises(RuntimeError):
            create_web_app({'JWT_SECRET': ''})

    def test_token_from_another_secret(self):
        """Tokens signed with a different secret are ignored."""
        self.register('ana', 'a@x.com')
        ben_id = self.register('ben', 'b@x.com').get_json()['_id']
        forged = sessions.generate_token(ben_id, secret=SECRET + 'x')
        self.client.set_cookie('token', forged)
        response = self.client.post('/users/ana/follow')
        self.assertEqual(response.status_code, 401)
