"""
Per-request wiring: one SqlCollectionStore per collection, bound to the
request's session, handed to the services.
"""
from fastapi import BackgroundTasks, Depends
from sqlalchemy.orm import Session

from api.send_email import dispatch_verification_email
from database import get_db
from models import Activity, DashboardStats, Mission, Notification, Payment, UserAccount, VerificationCode
from services.admin_service import AdminService
from services.auth_service import AuthOrchestrator
from services.dashboard_service import DashboardService
from services.profile_service import ProfileService
from services.verification_code_service import CodeIssuer, CodeVerifier
from utils.collection_store import SqlCollectionStore


def get_auth_orchestrator(background_tasks: BackgroundTasks, db: Session = Depends(get_db)) -> AuthOrchestrator:
    codes = SqlCollectionStore(db, VerificationCode)

    def notify(email: str, code: str, purpose: str):
        # Sent after the response goes out
        background_tasks.add_task(dispatch_verification_email, email, code, purpose)

    return AuthOrchestrator(
        users=SqlCollectionStore(db, UserAccount),
        issuer=CodeIssuer(codes),
        verifier=CodeVerifier(codes),
        notifier=notify,
    )


def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    return ProfileService(SqlCollectionStore(db, UserAccount))


def get_dashboard_service(db: Session = Depends(get_db)) -> DashboardService:
    return DashboardService(
        users=SqlCollectionStore(db, UserAccount),
        missions=SqlCollectionStore(db, Mission),
        activities=SqlCollectionStore(db, Activity),
        notifications=SqlCollectionStore(db, Notification),
        stats=SqlCollectionStore(db, DashboardStats),
    )


def get_admin_service(db: Session = Depends(get_db)) -> AdminService:
    return AdminService(
        users=SqlCollectionStore(db, UserAccount),
        missions=SqlCollectionStore(db, Mission),
        payments=SqlCollectionStore(db, Payment),
    )
