"""
Click tracking storage, listing and dashboard aggregation
"""
from datetime import datetime, timedelta, timezone
from flask import current_app
from sqlalchemy import select, delete, func
from gallery_api import db
from gallery_api.models.click import Click
from gallery_api.services.metrics_service import MetricsService

TIME_RANGES = ('all', 'today', 'week', 'month', 'year', 'custom')


class ClickQueryError(ValueError):
    """Invalid filter parameters for click queries"""


def parse_buttons(raw):
    """Split a comma separated button list, dropping blanks"""
    if not raw:
        return []
    return [button.strip() for button in raw.split(',') if button.strip()]


def parse_day(raw, field):
    try:
        return datetime.strptime(raw, '%Y-%m-%d').replace(tzinfo=timezone.utc)
    except (TypeError, ValueError):
        raise ClickQueryError(f'{field} must be a date in YYYY-MM-DD format')


def resolve_time_range(time_range, start=None, end=None, now=None):
    """
    Turn a dashboard time filter into a half-open [since, until) window.

    Weeks start on Sunday. Custom ranges include the whole end day. Either
    bound may be None for an open-ended window.
    """
    time_range = (time_range or 'all').lower()
    if time_range not in TIME_RANGES:
        raise ClickQueryError(f"range must be one of: {', '.join(TIME_RANGES)}")

    now = now or datetime.now(timezone.utc)
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    tomorrow = today + timedelta(days=1)

    if time_range == 'today':
        return today, tomorrow
    if time_range == 'week':
        # Python weekday(): Monday == 0, so Sunday is 6
        days_since_sunday = (today.weekday() + 1) % 7
        return today - timedelta(days=days_since_sunday), tomorrow
    if time_range == 'month':
        return today.replace(day=1), tomorrow
    if time_range == 'year':
        return today.replace(month=1, day=1), tomorrow
    if time_range == 'custom':
        if not start or not end:
            return None, None
        since = parse_day(start, 'start')
        until = parse_day(end, 'end') + timedelta(days=1)
        if until <= since:
            raise ClickQueryError('end must not be before start')
        return since, until
    return None, None


class ClickService:
    """Persist and report guest click events"""

    @staticmethod
    def _filtered(query, buttons=None, since=None, until=None):
        if buttons:
            query = query.where(Click.button.in_(buttons))
        if since is not None:
            query = query.where(Click.timestamp >= since)
        if until is not None:
            query = query.where(Click.timestamp < until)
        return query

    def log_click(self, button, page):
        click = Click(button=button.strip(), page=page.strip())
        db.session.add(click)
        db.session.commit()
        MetricsService.track_click()
        return click

    def list_clicks(self, page=1, limit=10, buttons=None):
        """Paginated clicks, newest first"""
        query = self._filtered(select(Click), buttons).order_by(Click.timestamp.desc())
        return db.paginate(query, page=page, per_page=limit, error_out=False, count=True)

    def delete_click(self, click_id):
        """Delete one click; returns False when it does not exist"""
        click = Click.find_by_id(click_id)
        if click is None:
            return False
        db.session.delete(click)
        db.session.commit()
        return True

    def delete_all(self):
        deleted = db.session.execute(delete(Click)).rowcount
        db.session.commit()
        current_app.logger.info(f"Deleted all click logs ({deleted} rows)")
        return deleted

    def summarize(self, buttons=None, since=None, until=None):
        """Click counts per button, per page and per day for the dashboard charts"""
        def grouped(column):
            query = self._filtered(
                select(column.label('key'), func.count(Click.id).label('count')),
                buttons, since, until
            )
            return db.session.execute(
                query.group_by(column).order_by(func.count(Click.id).desc(), column)
            ).all()

        day = func.date(Click.timestamp)
        daily = db.session.execute(
            self._filtered(
                select(day.label('day'), func.count(Click.id).label('count')),
                buttons, since, until
            ).group_by(day).order_by(day)
        ).all()

        by_button = grouped(Click.button)
        return {
            'total': sum(row.count for row in by_button),
            'buttons': [{'button': row.key, 'count': row.count} for row in by_button],
            'pages': [{'page': row.key, 'count': row.count} for row in grouped(Click.page)],
            'daily': [{'date': str(row.day), 'count': row.count} for row in daily]
        }
