from django.contrib.auth.middleware import PersistentRemoteUserMiddleware


class SignInHeaderMiddleware(PersistentRemoteUserMiddleware):
    """
    Start a session for the email in ``X-Auth-Email``. Only enable behind a
    proxy that sets the header itself and strips it from client requests.
    """
    header = 'HTTP_X_AUTH_EMAIL'
