from rest_framework.authentication import SessionAuthentication


class SessionUserAuthentication(SessionAuthentication):
    """
    Session authentication that also resolves inactive users.

    DRF's ``SessionAuthentication`` drops inactive users, which would turn
    them into 401s; ``RoleGate`` answers them with 403 instead.
    """

    def authenticate(self, request):
        user = getattr(request._request, 'user', None)
        if not user or not user.is_authenticated:
            return None

        self.enforce_csrf(request)
        return (user, None)
