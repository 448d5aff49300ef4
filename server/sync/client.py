"""
One browser connection to the dashboard.

The client owns the identity state for the connection and at most one
DashboardSession. Sessions are created when the identity provider reports
a sign-in and torn down when it reports a sign-out or the connection goes
away, so nothing from one login leaks into the next.
"""
import logging

from docstore import DocumentStoreError
from identity import AuthenticationError, IdentityProvider, resolve_role
from sync import actions
from sync.session import DashboardSession

logger = logging.getLogger(__name__)

SCREENS = {
    'admin': 'admin-dashboard',
    'supervisor': 'supervisor-dashboard',
}

LOGIN_MESSAGES = {
    'admin': 'Admin logged in successfully',
    'supervisor': 'Supervisor logged in successfully',
}

NOT_AUTHORIZED = 'User not authorized. Please check your credentials.'
LOGIN_UNAVAILABLE = 'Login failed: the service is unavailable. Please try again.'


class DashboardClient:
    def __init__(self, store, publish, identity=None):
        self.store = store
        self.publish = publish
        self.identity = identity or IdentityProvider()
        self.identity.on_state_changed(self._on_auth_state)
        self.session = None
        self._auth_error = None

    @property
    def user(self):
        return self.session.user if self.session else None

    def toast(self, message, is_error=False):
        self.publish('toast', {'message': message, 'is_error': is_error})

    # -------- Login / logout --------

    def login(self, email, password):
        self._auth_error = None
        try:
            self.identity.authenticate(email, password)
        except AuthenticationError:
            logger.info("[AUTH] Login failed for %s", email)
            self.toast('Login failed: Invalid credentials.', True)
            return {'success': False, 'error': 'Login failed: Invalid credentials.'}
        except DocumentStoreError:
            logger.exception("[AUTH] Account lookup failed for %s", email)
            self.toast(LOGIN_UNAVAILABLE, True)
            return {'success': False, 'error': LOGIN_UNAVAILABLE}

        if self.session is None:
            return {'success': False, 'error': self._auth_error or NOT_AUTHORIZED}

        self.session.log('login', LOGIN_MESSAGES[self.session.role])
        return {'success': True, 'user': self.session.user.to_dict()}

    def logout(self):
        if self.session is None:
            return {'success': False, 'error': 'Not logged in.'}
        self.session.log('logout', 'User logged out')
        self.identity.sign_out()
        self.toast('Logged out successfully.')
        return {'success': True}

    def close(self):
        """Connection dropped: tear down without auditing a logout."""
        self._end_session()

    def _on_auth_state(self, auth):
        # A sign-in always replaces whatever session was live before it.
        self._end_session()
        if auth is None:
            self.publish('health', {'status': 'OFFLINE'})
            self.publish('screen', {'screen': 'login-screen'})
            return

        self.publish('health', {'status': 'ONLINE'})
        try:
            user = resolve_role(self.store, auth.email)
        except DocumentStoreError:
            logger.exception("[AUTH] Role lookup failed for %s", auth.email)
            self._reject(LOGIN_UNAVAILABLE)
            return
        if user is None:
            self._reject(NOT_AUTHORIZED)
            return

        session = DashboardSession(user, self.store, self.publish)
        try:
            session.start()
        except DocumentStoreError:
            logger.exception("[SYNC] Could not follow feeds for %s", user.id)
            session.close()
            self._reject(LOGIN_UNAVAILABLE)
            return
        self.session = session
        self.publish('screen', {'screen': SCREENS[user.role], 'user': user.to_dict()})

    def _reject(self, message):
        self._auth_error = message
        self.identity.sign_out()
        self.toast(message, True)

    def _end_session(self):
        if self.session is not None:
            self.session.close()
            self.session = None

    # -------- Actions --------

    def perform(self, action, *args):
        """Run a dashboard action and surface its outcome as a toast."""
        if self.session is None:
            result = {'success': False, 'error': 'Please log in first.'}
        else:
            result = getattr(actions, action)(self.session, *args)
        if result['success']:
            self.toast(result['message'])
        else:
            self.toast(result['error'], True)
        return result
