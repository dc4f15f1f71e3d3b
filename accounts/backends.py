from django.contrib.auth.backends import AllowAllUsersRemoteUserBackend

from accounts.services import record_sign_in


class SignInBackend(AllowAllUsersRemoteUserBackend):
    """
    Authenticate the email asserted by the identity provider in front of the
    service. The first sign-in creates the user as a loader.
    """
    name_header = 'HTTP_X_AUTH_NAME'

    def authenticate(self, request, remote_user):
        if not remote_user:
            return None
        name = request.META.get(self.name_header, '') if request is not None else ''
        user, _ = record_sign_in(remote_user, name)
        return user

    def clean_username(self, username):
        return username.strip().lower()
