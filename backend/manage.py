#!/usr/bin/env python
"""Django's command-line utility for administrative tasks."""
import os
import sys


def main():
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "flyby.settings")
    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc

    from django.conf import settings
    from django.core.management.commands.runserver import Command as runserver

    # Bare `runserver` listens on PORT instead of Django's 8000.
    runserver.default_port = str(settings.PORT)

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
