"""Controllers under App\\Controllers."""

from passer_sample.services import Request

DEFAULT_GREETING = "world"


class HomeController:
    def index(self, name=DEFAULT_GREETING):
        return {"hello": name}


class AdminController:
    def index(self, request: Request):
        return {"controller": "admin", "request": type(request).__name__}
