from client.components.header import Header
from client.components.item_card import render_card, render_grid
