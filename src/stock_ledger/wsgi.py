from django.core.wsgi import get_wsgi_application

from . import conf

conf.configure()

application = get_wsgi_application()
