"""Application service for the admission application lifecycle."""

import logging
import uuid
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from admissions.config import settings
from admissions.core.enums import ApplicationStatus, Decision
from admissions.core.exceptions import NotFoundError, ValidationError
from admissions.core.workflow import TERMINAL_STATUSES, ensure_transition
from admissions.db.base import utcnow
from admissions.models.domain.application import Application
from admissions.repositories.application_repository import ApplicationRepository
from admissions.repositories.program_repository import ProgramRepository
from admissions.services.eligibility_service import EligibilityService

logger = logging.getLogger(__name__)

# Fields an application needs before it can be submitted
SUBMISSION_REQUIRED_FIELDS = [
    "first_name",
    "last_name",
    "email",
    "date_of_birth",
    "gender",
    "nationality",
    "national_id",
    "program_id",
    "entry_year",
    "entry_semester",
]


class ApplicationService:
    """
    Application service for managing admission applications.

    Provides creation and editing of drafts, fee payment, submission with
    automatic eligibility evaluation, withdrawal, staff status changes and
    admission decisions.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the application service.

        Args:
            db: Async database session
        """
        self.db = db
        self.repo = ApplicationRepository(db)
        self.program_repo = ProgramRepository(db)

    @staticmethod
    def generate_payment_reference() -> str:
        """
        Generate a payment reference for the fee stub.

        Format: PAY-XXXXXXXXXXXX
        """
        return f"PAY-{uuid.uuid4().hex[:12].upper()}"

    async def _get_or_404(self, application_id: UUID) -> Application:
        application = await self.repo.get_by_id(application_id)
        if not application:
            raise NotFoundError(f"Application with ID {application_id} not found")
        return application

    async def _ensure_program(self, program_id: UUID) -> None:
        program = await self.program_repo.get_by_id(program_id)
        if not program:
            raise NotFoundError(f"Program with ID {program_id} not found")
        if not program.active:
            raise ValidationError(f"Program {program.code} is not accepting applications")

    async def create_application(self, user_id: UUID, data: Dict[str, Any]) -> Application:
        """
        Create a draft application.

        Args:
            user_id: Owning applicant
            data: Application fields (program_id required)

        Returns:
            The created draft application

        Raises:
            NotFoundError: If the program does not exist
            ValidationError: If the program is inactive
        """
        await self._ensure_program(data["program_id"])

        application = await self.repo.create(
            user_id=user_id,
            status=ApplicationStatus.DRAFT,
            decision=Decision.PENDING,
            **data,
        )
        await self.db.commit()

        logger.info(f"Application created: {application.id} (user {user_id})")
        return application

    async def get_application(self, application_id: UUID) -> Application:
        """
        Retrieve an application by ID.

        Raises:
            NotFoundError: If the application does not exist
        """
        return await self._get_or_404(application_id)

    async def list_applications(
        self,
        user_id: Optional[UUID] = None,
        status: Optional[ApplicationStatus] = None,
        program_id: Optional[UUID] = None,
        page: int = 1,
        page_size: int = 20,
    ) -> Tuple[List[Application], int]:
        """
        List applications with filters and pagination.

        Returns:
            Tuple of (applications on the page, total matching applications)
        """
        skip = (page - 1) * page_size
        applications = await self.repo.list_applications(
            user_id=user_id,
            status=status,
            program_id=program_id,
            skip=skip,
            limit=page_size,
        )
        total = await self.repo.count(user_id=user_id, status=status, program_id=program_id)
        return applications, total

    async def update_application(
        self, application_id: UUID, updates: Dict[str, Any]
    ) -> Application:
        """
        Update a draft application.

        Args:
            application_id: UUID of the application
            updates: Fields to change (unset fields are left alone)

        Returns:
            The updated application

        Raises:
            NotFoundError: If the application or new program does not exist
            ValidationError: If the application is no longer a draft
        """
        application = await self._get_or_404(application_id)

        if application.status != ApplicationStatus.DRAFT:
            raise ValidationError("Cannot update submitted application")

        if updates.get("program_id") and updates["program_id"] != application.program_id:
            await self._ensure_program(updates["program_id"])

        application = await self.repo.update(application, **updates)
        await self.db.commit()
        return application

    async def pay_fee(
        self, application_id: UUID, payment_reference: Optional[str] = None
    ) -> Application:
        """
        Mark the application fee as paid.

        No payment gateway is involved; the reference is stored as given or generated.

        Raises:
            NotFoundError: If the application does not exist
            ValidationError: If the fee is already paid or the application is closed
        """
        application = await self._get_or_404(application_id)

        if application.fee_paid:
            raise ValidationError("Application fee already paid")
        if application.status in TERMINAL_STATUSES:
            raise ValidationError(
                f"Cannot pay fee for application with status {application.status.value}"
            )

        application = await self.repo.update(
            application,
            fee_paid=True,
            payment_reference=payment_reference or self.generate_payment_reference(),
        )
        await self.db.commit()

        logger.info(f"Fee paid for application {application_id}")
        return application

    @staticmethod
    def _validate_for_submission(application: Application) -> None:
        """Validate the application has every field required for submission."""
        missing = [
            field for field in SUBMISSION_REQUIRED_FIELDS if not getattr(application, field, None)
        ]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    async def submit_application(self, application_id: UUID) -> Application:
        """
        Submit a draft application and trigger automatic eligibility evaluation.

        A failed automatic evaluation is logged and leaves the submission in place.

        Args:
            application_id: UUID of the application

        Returns:
            The submitted application

        Raises:
            NotFoundError: If the application does not exist
            ValidationError: If not a draft, fields are missing or the fee is unpaid
        """
        application = await self._get_or_404(application_id)

        if application.status != ApplicationStatus.DRAFT:
            raise ValidationError("Application already submitted")

        self._validate_for_submission(application)

        if settings.SUBMISSION_REQUIRES_FEE and not application.fee_paid:
            raise ValidationError("Application fee must be paid before submission")

        ensure_transition(application.status, ApplicationStatus.SUBMITTED)
        application = await self.repo.update_status(
            application,
            ApplicationStatus.SUBMITTED,
            submitted_at=utcnow(),
        )
        await self.db.commit()
        logger.info(f"Application submitted: {application_id}")

        if settings.AUTO_EVALUATE_ON_SUBMIT:
            await self._auto_evaluate(application_id)

        return await self._get_or_404(application_id)

    async def _auto_evaluate(self, application_id: UUID) -> None:
        """Run the eligibility evaluation on behalf of the system."""
        try:
            await EligibilityService(self.db).evaluate(application_id, evaluated_by="system")
        except Exception as e:
            logger.error(
                f"Automatic eligibility evaluation failed for application "
                f"{application_id}: {str(e)}",
                exc_info=True,
            )
            await self.db.rollback()

    async def withdraw_application(self, application_id: UUID) -> Application:
        """
        Withdraw an application.

        Raises:
            NotFoundError: If the application does not exist
            InvalidStatusTransitionError: If the current status cannot be withdrawn
        """
        application = await self._get_or_404(application_id)
        ensure_transition(application.status, ApplicationStatus.WITHDRAWN)

        application = await self.repo.update_status(application, ApplicationStatus.WITHDRAWN)
        await self.db.commit()

        logger.info(f"Application withdrawn: {application_id}")
        return application

    async def update_application_status(
        self,
        application_id: UUID,
        status: ApplicationStatus,
        changed_by: str,
    ) -> Application:
        """
        Change an application's status on behalf of staff.

        Args:
            application_id: UUID of the application
            status: New status
            changed_by: Staff identifier recorded as reviewer

        Returns:
            The updated application

        Raises:
            NotFoundError: If the application does not exist
            InvalidStatusTransitionError: If the transition is not allowed
        """
        application = await self._get_or_404(application_id)
        previous = application.status
        ensure_transition(previous, status)

        fields: Dict[str, Any] = {"reviewed_by": changed_by, "reviewed_at": utcnow()}
        if status == ApplicationStatus.SUBMITTED and not application.submitted_at:
            fields["submitted_at"] = utcnow()

        application = await self.repo.update_status(application, status, **fields)
        await self.db.commit()

        logger.info(
            f"Application {application_id} status changed by {changed_by}: "
            f"{previous.value} -> {status.value}"
        )
        return application

    async def make_decision(
        self,
        application_id: UUID,
        decision: Decision,
        decided_by: str,
        notes: Optional[str] = None,
    ) -> Application:
        """
        Record an admission decision.

        Accepted and rejected close the application; waitlisted keeps it under review.

        Raises:
            NotFoundError: If the application does not exist
            ValidationError: If the decision value is not a final decision
            InvalidStatusTransitionError: If the application is not under review
        """
        if decision == Decision.PENDING:
            raise ValidationError("Invalid decision")

        application = await self._get_or_404(application_id)
        target = {
            Decision.ACCEPTED: ApplicationStatus.ACCEPTED,
            Decision.REJECTED: ApplicationStatus.REJECTED,
            Decision.WAITLISTED: ApplicationStatus.UNDER_REVIEW,
        }[decision]
        if not (decision == Decision.WAITLISTED and application.status == target):
            ensure_transition(application.status, target)

        now = utcnow()
        application = await self.repo.update_status(
            application,
            target,
            decision=decision,
            decision_by=decided_by,
            decision_notes=notes,
            decision_date=now,
            reviewed_by=decided_by,
            reviewed_at=now,
        )
        await self.db.commit()

        logger.info(f"Decision made: {decision.value} for application {application_id}")
        return application
