from client.views.add_item import AddItemView
from client.views.family import FamilyView
from client.views.home import HomeView
from client.views.items import ItemsView
from client.views.login import LoginView
from client.views.register import RegisterView
from client.views.settings import SettingsView
