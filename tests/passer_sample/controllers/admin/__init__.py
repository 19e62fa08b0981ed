"""Controllers under App\\Controllers\\Admin."""

from passer_sample.services import Request, UserService


class UserController:
    def __init__(self, service: UserService):
        self.service = service

    def show(self, id, request: Request):
        return {
            "user": self.service.find(id),
            "request": type(request).__name__,
        }

    def edit(self, request: Request, id, mode: str = "view"):
        return {"request": request, "id": id, "mode": mode}
