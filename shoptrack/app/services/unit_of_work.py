from abc import ABC, abstractmethod

from shoptrack.app.repositories.category_repository import ICategoryRepository
from shoptrack.app.repositories.customer_repository import ICustomerRepository
from shoptrack.app.repositories.identity_repository import IIdentityRepository
from shoptrack.app.repositories.product_repository import IProductRepository
from shoptrack.app.repositories.tenant_repository import ITenantRepository
from shoptrack.app.repositories.user_profile_repository import IUserProfileRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    identities: IIdentityRepository
    profiles: IUserProfileRepository
    tenants: ITenantRepository
    customers: ICustomerRepository
    products: IProductRepository
    categories: ICategoryRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
