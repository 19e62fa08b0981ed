"""Services the sample controllers depend on."""


class Request:
    """Stand-in for the framework's request object."""

    def __init__(self):
        self.headers = {}


class DatabaseConfig:
    def __init__(self, dsn: str = "sqlite://:memory:"):
        self.dsn = dsn


class Database:
    def __init__(self, config: DatabaseConfig):
        self.config = config


class UserRepository:
    def __init__(self, db: Database):
        self.db = db

    def find(self, user_id):
        return {"id": user_id, "dsn": self.db.config.dsn}


class UserService:
    def __init__(self, repo: UserRepository):
        self.repo = repo

    def find(self, user_id):
        return self.repo.find(user_id)
