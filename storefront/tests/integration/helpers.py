from authentication.session import SESSION_KEY


def login_client(client, user):
    """Put ``user`` into the test client's session like a completed sign-in."""
    session = client.session
    session[SESSION_KEY] = user.to_session()
    session.save()
