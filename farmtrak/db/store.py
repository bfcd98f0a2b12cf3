import uuid

from fastapi import Depends
from sqlmodel import Session, select

from farmtrak.auth.ownership import OWNERSHIP_RULES, ResourceRef, ResourceType
from farmtrak.db.session import get_session
from farmtrak.model import Account, Farm


class FarmStore:
    """
    Acesso a dados usado pela camada de autorização.

    Recebe a Session por injeção (nunca um client global), para que testes
    possam trocar o banco via `app.dependency_overrides[get_session]`.
    """

    def __init__(self, session: Session):
        self.session = session

    def get_account(self, account_id: uuid.UUID) -> Account | None:
        return self.session.get(Account, account_id)

    def get_account_by_email(self, email: str) -> Account | None:
        return self.session.exec(select(Account).where(Account.email == email)).first()

    def get_resource_ref(self, resource_type: ResourceType, resource_id: uuid.UUID) -> ResourceRef | None:
        """
        Carrega o recurso e resolve o dono.

        Retorna None se o recurso não existe. Para recursos de um salto
        (animal, crop) carrega também a fazenda pai.
        """
        rule = OWNERSHIP_RULES[resource_type]
        resource = self.session.get(rule.model, resource_id)
        if resource is None:
            return None

        if rule.owner_field is not None:
            return ResourceRef(resource_type, resource, getattr(resource, rule.owner_field))

        parent = self.session.get(Farm, getattr(resource, rule.parent_field))
        owner_id = parent.owner_id if parent is not None else None
        return ResourceRef(resource_type, resource, owner_id, parent=parent)


def get_store(session: Session = Depends(get_session)) -> FarmStore:
    """Dependency do FastAPI: FarmStore sobre a sessão da request."""
    return FarmStore(session)
