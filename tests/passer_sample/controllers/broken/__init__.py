from passer_sample.does_not_exist import Missing  # noqa: F401


class PageController:
    def index(self):
        return "unreachable"
