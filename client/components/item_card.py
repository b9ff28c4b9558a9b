from client import templating


def _macro(name):
    return getattr(templating.env.get_template('components/item_card.html').module, name)


def render_card(item):
    return str(_macro('card')(item))


def render_grid(items):
    return str(_macro('grid')(items))
