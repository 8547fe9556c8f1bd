"""
WSGI config for the SYMX console.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'symx_core.settings')

application = get_wsgi_application()
