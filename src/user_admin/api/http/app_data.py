from dataclasses import dataclass

from src.user_admin.core.services import DbSessionService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
