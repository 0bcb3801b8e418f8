from .user_account import UserAccount
from .verification_code import VerificationCode
from .mission import Mission
from .activity import Activity
from .notification import Notification
from .dashboard_stats import DashboardStats
from .payment import Payment

__all__ = ['UserAccount', 'VerificationCode', 'Mission', 'Activity', 'Notification', 'DashboardStats', 'Payment']
