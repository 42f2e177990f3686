import pytest
from ordering.projections.order_tracking import tracking_steps


def _reached(view):
    return [step["reached"] for step in view["steps"]]


class TestTrackingSteps:
    @pytest.mark.parametrize(
        "status, reached, progress",
        [
            ("Pending", [True, False, False, False], 0),
            ("Paid", [True, True, False, False], 33),
            ("Shipped", [True, True, True, False], 67),
            ("Completed", [True, True, True, True], 100),
        ],
    )
    def test_progress_follows_fulfillment(self, status, reached, progress):
        view = tracking_steps(status)
        assert view["cancelled"] is False
        assert _reached(view) == reached
        assert view["progress"] == progress

    def test_cancelled_order_shows_only_first_step(self):
        view = tracking_steps("Cancelled")
        assert view["cancelled"] is True
        assert _reached(view) == [True, False, False, False]
        assert view["progress"] == 0

    def test_completed_step_reads_delivered(self):
        labels = [step["label"] for step in tracking_steps("Pending")["steps"]]
        assert labels == ["Order placed", "Paid", "Shipped", "Delivered"]
