from hydroplan.errors import NotFoundError, ValidationError
from hydroplan.services.daily_plan_service import DailyPlanService
from hydroplan.services.intake_service import IntakeService
from tests.base import HydroplanTestCase


class IntakeLifecycleTestCase(HydroplanTestCase):
    def setUp(self):
        super().setUp()
        self.user = self.make_user()
        self.plan = self.make_plan(self.user, target_ml=2000)

    def test_create_then_delete_restores_plan(self):
        before = DailyPlanService.recalculate_from_intakes(self.plan.id)
        before_values = (before.total_intake_ml, before.deviation_ml)

        intake = IntakeService.create_intake({"daily_plan_id": self.plan.id, "volume_ml": 300})
        self.assertEqual(self.plan.total_intake_ml, 300)

        IntakeService.delete_intake(intake.id)

        self.assertEqual((self.plan.total_intake_ml, self.plan.deviation_ml), before_values)

    def test_update_volume_recalculates(self):
        intake = IntakeService.create_intake({"daily_plan_id": self.plan.id, "volume_ml": 300})

        IntakeService.update_intake(intake.id, {"volume_ml": 250})

        self.assertEqual(self.plan.total_intake_ml, 250)
        self.assertEqual(self.plan.deviation_ml, -700)

    def test_moving_intake_recalculates_both_plans(self):
        other = self.make_plan(self.user, target_ml=2000, plan_date=self.plan.plan_date.replace(day=11))
        intake = IntakeService.create_intake({"daily_plan_id": self.plan.id, "volume_ml": 300})

        IntakeService.update_intake(intake.id, {"daily_plan_id": other.id})

        self.assertEqual(self.plan.total_intake_ml, 0)
        self.assertEqual(other.total_intake_ml, 300)

    def test_negative_volume_is_rejected_before_write(self):
        intake = IntakeService.create_intake({"daily_plan_id": self.plan.id, "volume_ml": 300})

        with self.assertRaises(ValidationError):
            IntakeService.update_intake(intake.id, {"volume_ml": -5, "daily_plan_id": self.plan.id})

        self.assertEqual(IntakeService.get_intake(intake.id).volume_ml, 300)

    def test_unknown_plan(self):
        with self.assertRaises(NotFoundError):
            IntakeService.create_intake({"daily_plan_id": 999, "volume_ml": 100})

    def test_list_filters_by_time_window(self):
        IntakeService.create_intake({"daily_plan_id": self.plan.id, "volume_ml": 100, "intake_time": "2026-03-10T07:00:00Z"})
        IntakeService.create_intake({"daily_plan_id": self.plan.id, "volume_ml": 100, "intake_time": "2026-03-10T10:00:00Z"})

        intakes = IntakeService.list_intakes(daily_plan_id=self.plan.id, time_from="2026-03-10T09:00:00Z")

        self.assertEqual(len(intakes), 1)
        self.assertEqual(intakes[0].intake_time.hour, 10)
