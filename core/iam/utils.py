def display_name(user) -> str | None:
    if user is None:
        return None
    return user.get_full_name() or user.username
