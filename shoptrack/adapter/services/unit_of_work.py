from sqlmodel.ext.asyncio.session import AsyncSession

from shoptrack.adapter.repositories.category_repository import CategoryRepository
from shoptrack.adapter.repositories.customer_repository import CustomerRepository
from shoptrack.adapter.repositories.identity_repository import IdentityRepository
from shoptrack.adapter.repositories.product_repository import ProductRepository
from shoptrack.adapter.repositories.tenant_repository import TenantRepository
from shoptrack.adapter.repositories.user_profile_repository import UserProfileRepository
from shoptrack.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.identities = IdentityRepository(self.session)
        self.profiles = UserProfileRepository(self.session)
        self.tenants = TenantRepository(self.session)
        self.customers = CustomerRepository(self.session)
        self.products = ProductRepository(self.session)
        self.categories = CategoryRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
