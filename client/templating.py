"""
Jinja2 environment for the client's markup.
"""
from jinja2 import Environment, PackageLoader, select_autoescape

from client import nav
from client.routes import Path


env = Environment(
    loader=PackageLoader('client', 'templates'),
    autoescape=select_autoescape(['html']),
    trim_blocks=True,
    lstrip_blocks=True,
)
env.globals.update(
    Path=Path,
    nav_items=nav.NAV_ITEMS,
    href_for=nav.href_for,
    active_class=nav.ACTIVE_CLASS,
)


def render(template_name, **context):
    return env.get_template(template_name).render(**context)
