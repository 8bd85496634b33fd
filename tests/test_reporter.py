from datetime import datetime, timedelta, timezone

import pytest

from salon_booking.schemas import CustomerSpec, ServiceCreate

IST = timezone(timedelta(hours=5, minutes=30))


def guest(n: int) -> CustomerSpec:
    return CustomerSpec(name=f"Guest {n}", mobile=f"91000000{n:02d}", place="Guntur")


@pytest.fixture
def services(catalog):
    return {
        price: catalog.create(ServiceCreate(name=f"Service {price}", price=price, duration=30))
        for price in (100, 200, 300, 500)
    }


@pytest.fixture
def day_of_bookings(ledger, services, customer_spec):
    # fixed clock: 2024-06-01 12:00 IST
    done = [
        # 2024-05-31 19:00 UTC, already June 1st in IST
        ledger.create(customer_spec, services[100].id, 1, datetime(2024, 5, 31, 19, 0, tzinfo=timezone.utc)),
        ledger.create(guest(1), services[200].id, 2, datetime(2024, 6, 1, 10, 0, tzinfo=IST)),
        ledger.create(guest(2), services[300].id, 3, datetime(2024, 6, 1, 18, 0, tzinfo=IST)),
        # 23:59 IST the day before
        ledger.create(guest(3), services[500].id, 4, datetime(2024, 5, 31, 23, 59, tzinfo=IST)),
    ]
    for booking in done:
        ledger.complete(booking.id)

    # still open, same customer as the first booking
    ledger.create(customer_spec, services[100].id, 5, datetime(2024, 6, 1, 15, 0, tzinfo=IST))
    return done


def test_today_stats_only_count_the_ist_day(reporter, day_of_bookings):
    stats = reporter.today_stats()

    assert stats.total_revenue == 600
    assert stats.total_bookings == 4
    assert stats.completed_bookings == 3
    assert stats.pending_bookings == 1
    assert stats.total_customers == 3
    assert stats.start == datetime(2024, 6, 1, tzinfo=IST)


def test_month_and_year_windows(reporter, day_of_bookings):
    month = reporter.monthly_stats()
    year = reporter.yearly_stats()

    assert month.total_revenue == 600
    assert month.total_bookings == 4
    assert year.total_revenue == 1100
    assert year.total_bookings == 5
    assert year.total_customers == 4


def test_income_analytics_combines_the_three_windows(reporter, day_of_bookings):
    income = reporter.income_analytics()

    assert (income.today_revenue, income.monthly_revenue, income.yearly_revenue) == (600, 600, 1100)


def test_cancelled_bookings_count_but_earn_nothing(ledger, reporter, services, customer_spec):
    booking = ledger.create(customer_spec, services[300].id, 1, datetime(2024, 6, 1, 9, 0, tzinfo=IST))
    ledger.cancel(booking.id)

    stats = reporter.today_stats()
    assert (stats.total_revenue, stats.total_bookings, stats.pending_bookings) == (0, 1, 1)


def test_empty_window(reporter):
    stats = reporter.today_stats()
    assert (stats.total_revenue, stats.total_customers, stats.total_bookings) == (0, 0, 0)


def test_recent_bookings_newest_first(ledger, reporter, services, customer_spec):
    ids = [
        ledger.create(guest(n), services[100].id, n, datetime(2024, 6, 1, 10, 0, tzinfo=IST)).id
        for n in range(1, 4)
    ]

    recent = reporter.recent_bookings(2)
    assert [b.id for b in recent] == [ids[2], ids[1]]
    assert recent[0].customer.name == "Guest 3"
