"""
Read-only aggregates behind the role dashboards. Nothing here writes.
"""
import datetime

from django.contrib.auth import get_user_model
from django.db.models import Count, Q
from django.db.models.functions import TruncDate
from django.utils import timezone

from fleet.models import DriverProfile
from logistics_core.exceptions import NotFound
from logistics_core.pagination import breakdown
from notifications.models import Notification
from truck_requests.clients.fleet_client import FleetClient
from truck_requests.models import TruckRequest
from yard.models import LoadingBay, YardMovement

User = get_user_model()

RECENT_LIMIT = 5


def _today_bounds():
    start = timezone.localtime().replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + datetime.timedelta(days=1)


def _month_start():
    return timezone.localtime().replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def _daily_trend(queryset, field, days=7):
    since = timezone.now() - datetime.timedelta(days=days)
    rows = (
        queryset.filter(**{f'{field}__gte': since})
        .annotate(day=TruncDate(field))
        .values('day')
        .annotate(count=Count('id'))
        .order_by('day')
    )
    return [{'date': row['day'].isoformat(), 'count': row['count']} for row in rows]


def _notifications(user):
    inbox = Notification.objects.filter(recipient=user)
    return {
        'unreadCount': inbox.filter(is_read=False).count(),
        'recent': list(inbox.select_related('sender')[:RECENT_LIMIT]),
    }


def loader_dashboard(user):
    own = TruckRequest.objects.filter(requester=user)
    today, tomorrow = _today_bounds()
    return {
        'recentRequests': list(own.select_related('requester', 'assigned_truck', 'assigned_driver__user')[:RECENT_LIMIT]),
        'stats': {
            'totalRequests': own.count(),
            'pendingRequests': own.filter(status='pending').count(),
            'completedRequests': own.filter(status='completed').count(),
            'monthlyRequests': own.filter(created_at__gte=_month_start()).count(),
            'todayRequests': own.filter(created_at__gte=today, created_at__lt=tomorrow).count(),
            'todayCompleted': own.filter(
                status='completed', updated_at__gte=today, updated_at__lt=tomorrow
            ).count(),
        },
        'statusBreakdown': breakdown(own, 'status'),
        'priorityBreakdown': breakdown(own, 'priority'),
        'weeklyTrend': _daily_trend(own, 'created_at'),
        'notifications': _notifications(user),
    }


def dispatcher_dashboard(user):
    requests = TruckRequest.objects.select_related('requester', 'assigned_truck', 'assigned_driver__user')
    today, tomorrow = _today_bounds()
    active = Q(status__in=['pending', 'assigned', 'in_progress'])
    return {
        'pendingRequests': list(requests.filter(status='pending')[:10]),
        'inProgressRequests': list(requests.filter(status='in_progress')[:10]),
        'urgentRequests': list(requests.filter(active, priority='urgent')[:10]),
        'stats': {
            'totalRequests': TruckRequest.objects.count(),
            'assignedByMe': TruckRequest.objects.filter(assigned_by=user).count(),
            'todayRequests': TruckRequest.objects.filter(created_at__gte=today, created_at__lt=tomorrow).count(),
            'completedToday': TruckRequest.objects.filter(
                status='completed', updated_at__gte=today, updated_at__lt=tomorrow
            ).count(),
            'availableTrucksCount': FleetClient.get_available_trucks().count(),
            'availableDriversCount': DriverProfile.objects.filter(status='available', is_active=True).count(),
        },
        'statusBreakdown': breakdown(TruckRequest.objects.all(), 'status'),
        'priorityBreakdown': breakdown(TruckRequest.objects.all(), 'priority'),
        'notifications': _notifications(user),
    }


def switcher_dashboard(user):
    today, tomorrow = _today_bounds()
    mine = YardMovement.objects.filter(switcher=user)
    mine_today = mine.filter(created_at__gte=today, created_at__lt=tomorrow)
    queued = TruckRequest.objects.filter(status='assigned')
    bays = LoadingBay.objects.filter(is_active=True)
    return {
        'queueStats': {
            'totalInQueue': queued.count(),
            'totalInLoading': TruckRequest.objects.filter(status='in_progress').count(),
            'availableBays': bays.filter(status='available').count(),
            'occupiedBays': bays.filter(status='occupied').count(),
            'urgentInQueue': queued.filter(priority='urgent').count(),
        },
        'todayStats': {
            'movementsToday': mine_today.count(),
            'trucksProcessed': mine_today.filter(movement_type='departure').count(),
            'assignmentsToday': mine_today.filter(movement_type='bay_assigned').count(),
        },
        'recentMovements': list(mine.select_related('truck_request', 'switcher')[:10]),
        'bayStatusBreakdown': breakdown(bays, 'status'),
        'movementTypeBreakdown': breakdown(mine, 'movement_type'),
        'queuePriorityBreakdown': breakdown(queued, 'priority'),
        'notifications': _notifications(user),
    }


def driver_dashboard(user):
    profile = DriverProfile.objects.filter(user=user).first()
    if profile is None:
        raise NotFound('Driver profile not found')

    trips = TruckRequest.objects.filter(assigned_driver=profile)
    today, tomorrow = _today_bounds()
    return {
        'profile': profile,
        'currentTrip': (
            trips.filter(status__in=['assigned', 'in_progress'])
            .select_related('requester', 'assigned_truck', 'assigned_driver__user')
            .order_by('-assigned_at')
            .first()
        ),
        'assignedRequests': list(
            trips.select_related('requester', 'assigned_truck', 'assigned_driver__user')[:10]
        ),
        'stats': {
            'totalTrips': trips.count(),
            'completedTrips': trips.filter(status='completed').count(),
            'pendingTrips': trips.filter(status='assigned').count(),
            'inProgressTrips': trips.filter(status='in_progress').count(),
            'todayTrips': trips.filter(assigned_at__gte=today, assigned_at__lt=tomorrow).count(),
            'monthlyTrips': trips.filter(assigned_at__gte=_month_start()).count(),
        },
        'statusBreakdown': breakdown(trips, 'status'),
        'weeklyTrend': _daily_trend(trips, 'assigned_at'),
        'notifications': _notifications(user),
    }


def admin_dashboard(user):
    today, tomorrow = _today_bounds()
    requests = TruckRequest.objects.all()
    total_requests = requests.count()
    completed = requests.filter(status='completed').count()
    return {
        'stats': {
            'totalUsers': User.objects.count(),
            'activeUsers': User.objects.filter(is_active=True).count(),
            'inactiveUsers': User.objects.filter(is_active=False).count(),
            'totalRequests': total_requests,
            'totalNotifications': Notification.objects.count(),
            'completionRate': round(completed / total_requests * 100, 2) if total_requests else 0,
            'overdueRequests': requests.filter(
                status__in=['pending', 'assigned', 'in_progress'], required_time__lt=timezone.now()
            ).count(),
        },
        'todayStats': {
            'newUsers': User.objects.filter(created_at__gte=today, created_at__lt=tomorrow).count(),
            'newRequests': requests.filter(created_at__gte=today, created_at__lt=tomorrow).count(),
            'completedRequests': requests.filter(
                status='completed', updated_at__gte=today, updated_at__lt=tomorrow
            ).count(),
        },
        'usersByRole': breakdown(User.objects.all(), 'role'),
        'usersByDepartment': breakdown(User.objects.all(), 'department'),
        'requestsByStatus': breakdown(requests, 'status'),
        'requestsByPriority': breakdown(requests, 'priority'),
        'requestTrend': _daily_trend(requests, 'created_at', days=30),
        'recentUsers': list(User.objects.order_by('-created_at')[:RECENT_LIMIT]),
        'recentRequests': list(
            requests.select_related('requester', 'assigned_truck', 'assigned_driver__user')[:RECENT_LIMIT]
        ),
        'notifications': _notifications(user),
    }
