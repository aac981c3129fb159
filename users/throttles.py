from rest_framework.throttling import SimpleRateThrottle


class LoginRateThrottle(SimpleRateThrottle):
    """
    Login attempts counted per account, so guesses at one password from many
    addresses share a budget. Requests without an email are counted per client.
    """
    scope = 'login'

    def get_cache_key(self, request, view):
        if request.method != 'POST':
            return None
        email = request.data.get('email')
        if isinstance(email, str) and email.strip():
            ident = email.strip().lower()
        else:
            ident = self.get_ident(request)
        return self.cache_format % {'scope': self.scope, 'ident': ident}
