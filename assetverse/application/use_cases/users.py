"""User operations: signup, login lookup, profile read and edit."""

from __future__ import annotations

from dataclasses import replace

from assetverse.application.dtos.user import CreateUserCommand, UpdateProfileCommand
from assetverse.application.interfaces.store import DocumentWrite, IDocumentStore
from assetverse.application.mappers import user_from_doc, user_to_data
from assetverse.application.services.access_policy import AccessPolicy
from assetverse.application.services.conflict_retry import retry_on_conflict
from assetverse.application.services.listing import matches_search, paginate
from assetverse.core.constants import (
    COLLECTION_COMPANIES,
    COLLECTION_USERS,
    DEFAULT_PAGE_LIMIT,
    DEFAULT_SUBSCRIPTION,
)
from assetverse.domain.entities import UserEntity
from assetverse.domain.enums import UserRole
from assetverse.domain.exceptions import (
    AuthenticationException,
    CompanyAlreadyExistsException,
    ResourceNotFoundException,
    UserAlreadyExistsException,
    WriteConflictException,
)
from assetverse.shared.logging import get_logger
from assetverse.shared.utils.datetime import utc_now
from assetverse.shared.utils.generators import key_id

logger = get_logger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def user_doc_id(email: str) -> str:
    """Users are keyed by their email so signup uniqueness is a create precondition."""
    return key_id("user", email)


def company_doc_id(company_name: str) -> str:
    """One HR account per company name (case-insensitive)."""
    return key_id("company", company_name)


class UserService:
    """Accounts are keyed by email; HR accounts carry the company subscription."""

    def __init__(
        self,
        store: IDocumentStore,
        policy: AccessPolicy,
        *,
        base_package_limit: int,
        max_attempts: int = 3,
    ) -> None:
        self.store = store
        self.policy = policy
        self.base_package_limit = base_package_limit
        self.max_attempts = max_attempts

    async def find_by_email(self, email: str) -> UserEntity | None:
        doc = await self.store.get(COLLECTION_USERS, user_doc_id(email))
        return user_from_doc(doc) if doc else None

    async def authenticate(self, email: str) -> UserEntity:
        """Return the account for a login email, or raise AuthenticationException."""
        user = await self.find_by_email(email)
        if user is None:
            raise AuthenticationException("Unknown email")
        return user

    async def create_user(self, command: CreateUserCommand) -> UserEntity:
        """Register an account. HR accounts start on the base package.

        Raises:
            ValidationException: Missing name, or missing company for HR.
            UserAlreadyExistsException: Email already registered.
            CompanyAlreadyExistsException: Another HR account holds the company name.
        """
        email = normalize_email(command.email)
        now = utc_now()
        is_hr = command.role == UserRole.HR
        user = UserEntity(
            id=user_doc_id(email),
            email=email,
            name=command.name.strip(),
            role=command.role,
            company_name=command.company_name.strip() if is_hr and command.company_name else None,
            company_logo=command.company_logo if is_hr else None,
            package_limit=self.base_package_limit if is_hr else None,
            current_employees=0 if is_hr else None,
            subscription=DEFAULT_SUBSCRIPTION if is_hr else None,
            profile_image=command.profile_image,
            date_of_birth=command.date_of_birth,
            created_at=now,
            updated_at=now,
        )
        if await self.store.get(COLLECTION_USERS, user.id) is not None:
            raise UserAlreadyExistsException()
        writes = [DocumentWrite.create(COLLECTION_USERS, user.id, user_to_data(user))]
        if user.company_name:
            company_id = company_doc_id(user.company_name)
            if await self.store.get(COLLECTION_COMPANIES, company_id) is not None:
                raise CompanyAlreadyExistsException(user.company_name)
            writes.append(
                DocumentWrite.create(
                    COLLECTION_COMPANIES,
                    company_id,
                    {"companyName": user.company_name, "hrEmail": email},
                )
            )
        try:
            await self.store.commit(writes)
        except WriteConflictException:
            # Lost a signup race; report whichever key the winner took.
            if await self.store.get(COLLECTION_USERS, user.id) is not None:
                raise UserAlreadyExistsException() from None
            raise CompanyAlreadyExistsException(user.company_name or "") from None
        logger.info("Registered %s account %s", user.role.value, email)
        return user

    async def list_users(
        self,
        actor: UserEntity,
        *,
        email: str | None = None,
        role: UserRole | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int = DEFAULT_PAGE_LIMIT,
    ) -> list[UserEntity]:
        """Account directory for HR, newest first; ``email`` is an exact lookup."""
        self.policy.enforce(self.policy.can_list_users(actor))
        filters: dict[str, str] = {}
        if email:
            filters["email"] = normalize_email(email)
        if role is not None:
            filters["role"] = role.value
        docs = await self.store.query(
            COLLECTION_USERS, filters, order_by="createdAt", descending=True
        )
        users = [
            u
            for u in (user_from_doc(d) for d in docs)
            if matches_search(search, u.name, u.email, u.company_name)
        ]
        return paginate(users, skip, limit)

    async def get_profile(self, actor: UserEntity, email: str) -> UserEntity:
        self.policy.enforce(self.policy.can_view_profile(actor, email))
        user = await self.find_by_email(email)
        if user is None:
            raise ResourceNotFoundException("user", email)
        return user

    async def update_profile(
        self, actor: UserEntity, email: str, command: UpdateProfileCommand
    ) -> UserEntity:
        """Edit name, images and birth date (company logo for HR). Identity fields never change."""
        self.policy.enforce(self.policy.can_edit_profile(actor, email))

        async def attempt() -> UserEntity:
            doc = await self.store.get(COLLECTION_USERS, user_doc_id(email))
            if doc is None:
                raise ResourceNotFoundException("user", email)
            user = user_from_doc(doc)
            changes = {
                k: v
                for k, v in {
                    "name": command.name.strip() if command.name is not None else None,
                    "profile_image": command.profile_image,
                    "date_of_birth": command.date_of_birth,
                    "company_logo": command.company_logo if user.is_hr() else None,
                }.items()
                if v is not None
            }
            updated = replace(user, **changes, updated_at=utc_now())
            await self.store.commit(
                [
                    DocumentWrite.update(
                        COLLECTION_USERS, user.id, user_to_data(updated), doc.version
                    )
                ]
            )
            return updated

        return await retry_on_conflict(
            attempt, attempts=self.max_attempts, label="update_profile"
        )
