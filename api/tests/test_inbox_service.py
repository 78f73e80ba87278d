from datetime import date, datetime, timedelta, timezone

from concierge.models.inbox import (
    ConversationActivity, InboxFilters, InboxSignal, ReplyStatus, SortBy,
)
from concierge.services.inbox_service import calculate_inbox_priority, sort_by_priority


def signal(**overrides):
    base = dict(
        has_risk=False,
        sla_remaining_minutes=None,
        sla_warning_minutes=30,
        is_unreported=False,
        is_paused=False,
        plan_priority_level=2,
    )
    base.update(overrides)
    return InboxSignal(**base)


def activity(user_id, **overrides):
    base = dict(id=user_id, nickname=user_id, plan_code='standard', status='active')
    base.update(overrides)
    return ConversationActivity(**base)


class TestPriorityScore:

    def test_unreplied_breached_risky_premium(self, now):
        s = signal(
            has_unreplied_message=True, sla_remaining_minutes=0,
            has_risk=True, plan_priority_level=1,
        )
        assert calculate_inbox_priority(s, now) == 11800

    def test_paused_subtracts_5000(self, now):
        s = signal(
            has_unreplied_message=True, sla_remaining_minutes=0,
            has_risk=True, plan_priority_level=1, is_paused=True,
        )
        assert calculate_inbox_priority(s, now) == 6800

    def test_sla_pressure_is_capped(self, now):
        s = signal(has_unreplied_message=True, sla_remaining_minutes=1500, plan_priority_level=3)
        assert calculate_inbox_priority(s, now) == 10100

    def test_unreplied_without_sla(self, now):
        s = signal(has_unreplied_message=True, plan_priority_level=3)
        assert calculate_inbox_priority(s, now) == 10100

    def test_not_sent_today(self, now):
        s = signal(has_unreplied_message=False, has_sent_today_message=False, plan_priority_level=3)
        assert calculate_inbox_priority(s, now) == 5100

    def test_up_to_date(self, now):
        s = signal(has_unreplied_message=False, has_sent_today_message=True, plan_priority_level=3)
        assert calculate_inbox_priority(s, now) == 1100

    def test_paused_can_go_negative(self, now):
        s = signal(
            has_unreplied_message=False, has_sent_today_message=True,
            plan_priority_level=3, is_paused=True,
        )
        assert calculate_inbox_priority(s, now) == -3900

    def test_unreported_bonus(self, now):
        s = signal(has_unreplied_message=False, has_sent_today_message=True, is_unreported=True)
        assert calculate_inbox_priority(s, now) == 1000 + 300 + 200

    def test_legacy_inside_warning_window(self, now):
        assert calculate_inbox_priority(signal(sla_remaining_minutes=20), now) == 1200

    def test_legacy_warning_boundary_is_inclusive(self, now):
        assert calculate_inbox_priority(signal(sla_remaining_minutes=30), now) == 1200

    def test_legacy_outside_warning_window(self, now):
        assert calculate_inbox_priority(signal(sla_remaining_minutes=31), now) == 200

    def test_legacy_without_clock(self, now):
        assert calculate_inbox_priority(signal(), now) == 200

    def test_recency_bonus(self, now):
        s = signal(last_message_at=now - timedelta(hours=2, minutes=30))
        assert calculate_inbox_priority(s, now) == 200 + 48

    def test_recency_bonus_decays_to_zero(self, now):
        s = signal(last_message_at=now - timedelta(hours=60))
        assert calculate_inbox_priority(s, now) == 200

    def test_pause_demotes_below_unreplied_floor(self, now):
        s = signal(
            has_unreplied_message=True, sla_remaining_minutes=0, has_risk=True,
            is_unreported=True, plan_priority_level=1, last_message_at=now, is_paused=True,
        )
        unpaused = calculate_inbox_priority(
            signal(
                has_unreplied_message=True, sla_remaining_minutes=0, has_risk=True,
                is_unreported=True, plan_priority_level=1, last_message_at=now,
            ),
            now,
        )
        assert calculate_inbox_priority(s, now) == unpaused - 5000
        assert calculate_inbox_priority(s, now) < 10000


class TestBuildItem:

    def test_unreplied_premium(self, inbox_service, now):
        item = inbox_service.build_item(
            activity(
                'u1', plan_code='premium',
                last_user_message_at=now - timedelta(minutes=60),
                last_cast_message_at=now - timedelta(hours=3),
            ),
            now,
        )
        assert item.has_unreplied_message is True
        assert item.unreplied_minutes == 60
        assert item.sla_remaining_minutes == 60
        assert item.sla_warning_minutes == 30
        assert item.has_sent_today_message is True
        assert item.reply_status == ReplyStatus.UNREPLIED
        assert item.is_unreported is False
        # 10000 + (1000 - 60) + 300 (premium) + 49 (1h old)
        assert item.priority_score == 11289

    def test_replied_today(self, inbox_service, now):
        item = inbox_service.build_item(
            activity(
                'u2',
                last_user_message_at=now - timedelta(hours=5),
                last_cast_message_at=now - timedelta(hours=1),
            ),
            now,
        )
        assert item.has_unreplied_message is False
        assert item.sla_remaining_minutes is None
        assert item.unreplied_minutes is None
        assert item.reply_status == ReplyStatus.REPLIED
        assert item.priority_score == 1000 + 200 + 45

    def test_replied_yesterday(self, inbox_service):
        now = datetime(2024, 1, 10, 3, 0, tzinfo=timezone.utc)
        item = inbox_service.build_item(
            activity(
                'u3', plan_code='light',
                last_user_message_at=datetime(2024, 1, 9, 9, 0, tzinfo=timezone.utc),
                last_cast_message_at=datetime(2024, 1, 9, 10, 0, tzinfo=timezone.utc),
            ),
            now,
        )
        assert item.reply_status == ReplyStatus.NOT_SENT_TODAY
        assert item.priority_score == 5000 + 100 + 32

    def test_silent_paused_user(self, inbox_service, now):
        item = inbox_service.build_item(activity('u4', status='paused'), now)
        assert item.is_unreported is True
        assert item.reply_status == ReplyStatus.NOT_SENT_TODAY
        assert item.priority_score == 5000 + 300 + 200 - 5000

    def test_recent_checkin_keeps_user_reported(self, inbox_service, now):
        item = inbox_service.build_item(activity('u5', last_checkin_on=date(2024, 1, 9)), now)
        assert item.is_unreported is False

    def test_old_checkin_is_stale(self, inbox_service, now):
        item = inbox_service.build_item(activity('u6', last_checkin_on=date(2024, 1, 5)), now)
        assert item.is_unreported is True

    def test_unknown_plan_uses_standard(self, inbox_service, now):
        item = inbox_service.build_item(
            activity('u7', plan_code='vip', last_user_message_at=now - timedelta(minutes=20)),
            now,
        )
        assert item.sla_warning_minutes == 120
        assert item.sla_remaining_minutes == 700
        # 10000 + 300 + 200 + 50
        assert item.priority_score == 10550

    def test_birthday_flag(self, inbox_service, now):
        item = inbox_service.build_item(activity('u8', birthday=date(1995, 1, 10)), now)
        assert item.is_birthday_today is True

    def test_risk_carried_through(self, inbox_service, now):
        item = inbox_service.build_item(activity('u9', has_open_risk=True, risk_level=3), now)
        assert item.has_risk is True
        assert item.risk_level == 3


class TestBuildInbox:

    def activities(self, now):
        return [
            activity('replied', last_user_message_at=now - timedelta(hours=5),
                     last_cast_message_at=now - timedelta(hours=1)),
            activity('unreplied', last_user_message_at=now - timedelta(minutes=10),
                     assigned_cast_id='cast-1'),
            activity('quiet', last_user_message_at=now - timedelta(hours=30),
                     last_cast_message_at=now - timedelta(hours=29), has_open_risk=True),
            activity('pending', status='incomplete'),
        ]

    def test_sorted_by_priority(self, inbox_service, now):
        items, summary = inbox_service.build_inbox(self.activities(now), now=now)
        assert [i.id for i in items] == ['unreplied', 'quiet', 'replied']
        assert summary.total == 3

    def test_summary_ignores_state_filters(self, inbox_service, now):
        items, summary = inbox_service.build_inbox(
            self.activities(now), InboxFilters(reply_status='unreplied'), now,
        )
        assert [i.id for i in items] == ['unreplied']
        assert summary.total == 3
        assert summary.unreplied == 1
        assert summary.not_sent_today == 1
        assert summary.replied == 1

    def test_not_sent_today_filter(self, inbox_service, now):
        items, _ = inbox_service.build_inbox(
            self.activities(now), InboxFilters(reply_status='not_sent_today'), now,
        )
        assert [i.id for i in items] == ['quiet']

    def test_risk_filter(self, inbox_service, now):
        items, _ = inbox_service.build_inbox(self.activities(now), InboxFilters(has_risk=True), now)
        assert [i.id for i in items] == ['quiet']

    def test_assignment_filters(self, inbox_service, now):
        items, summary = inbox_service.build_inbox(
            self.activities(now), InboxFilters(assigned_cast_id='cast-1'), now,
        )
        assert [i.id for i in items] == ['unreplied']
        assert summary.total == 1

        items, _ = inbox_service.build_inbox(
            self.activities(now), InboxFilters(unassigned_only=True), now,
        )
        assert {i.id for i in items} == {'replied', 'quiet'}

    def test_plan_and_status_filters(self, inbox_service, now):
        acts = self.activities(now) + [activity('light-user', plan_code='light', status='trial')]
        items, _ = inbox_service.build_inbox(acts, InboxFilters(plan_codes=['light']), now)
        assert [i.id for i in items] == ['light-user']
        items, _ = inbox_service.build_inbox(acts, InboxFilters(statuses=['trial']), now)
        assert [i.id for i in items] == ['light-user']

    def test_sort_by_last_message(self, inbox_service, now):
        acts = self.activities(now) + [activity('silent')]
        items, _ = inbox_service.build_inbox(
            acts, InboxFilters(sort_by=SortBy.LAST_MESSAGE), now,
        )
        assert [i.id for i in items] == ['unreplied', 'replied', 'quiet', 'silent']

    def test_sort_by_nickname(self, inbox_service, now):
        items, _ = inbox_service.build_inbox(
            self.activities(now), InboxFilters(sort_by=SortBy.NICKNAME), now,
        )
        assert [i.id for i in items] == ['quiet', 'replied', 'unreplied']

    def test_sort_by_nickname_ignores_case(self, inbox_service, now):
        acts = [
            activity('u1', nickname='bob'),
            activity('u2', nickname='Carol'),
            activity('u3', nickname='alice'),
        ]
        items, _ = inbox_service.build_inbox(acts, InboxFilters(sort_by=SortBy.NICKNAME), now)
        assert [i.nickname for i in items] == ['alice', 'bob', 'Carol']


def test_sort_by_priority_is_stable(inbox_service, now):
    twins = [
        inbox_service.build_item(activity(name), now)
        for name in ('first', 'second', 'third')
    ]
    assert [i.id for i in sort_by_priority(twins)] == ['first', 'second', 'third']
