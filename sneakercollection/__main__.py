from sneakercollection.api import init_app
from sneakercollection.command import SneakersCommand

app = init_app()


if __name__ == "__main__":
    SneakersCommand().run()
