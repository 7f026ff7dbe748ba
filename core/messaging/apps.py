from django.apps import AppConfig


class MessagingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.messaging"
    label = "messaging"

    dispatcher = None

    def ready(self):
        from core.messaging.dispatch import MessageDispatcher

        MessagingConfig.dispatcher = MessageDispatcher.from_settings()


def get_dispatcher():
    return MessagingConfig.dispatcher


def set_dispatcher(dispatcher):
    """Swap the process-wide dispatcher (tests install fakes through this)."""
    previous = MessagingConfig.dispatcher
    MessagingConfig.dispatcher = dispatcher
    return previous
