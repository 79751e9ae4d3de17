import unittest

from membership_service.models import MembershipSubmission, lookup_plan
from membership_service.services import email_templates

from tests.fakes import FIXED_NOW


def make_submission(**overrides):
    base = {
        "email": "fan@example.com",
        "plan": "gold",
        "payment_method": "Credit Card",
        "transaction_id": "TX-1001",
    }
    return MembershipSubmission(**(base | overrides))


class DateFormatTests(unittest.TestCase):
    def test_long_date(self):
        self.assertEqual(email_templates.format_long_date(FIXED_NOW), "Monday, October 19, 2026")

    def test_timestamp(self):
        self.assertEqual(
            email_templates.format_timestamp(FIXED_NOW),
            "Monday, October 19, 2026 at 04:07 PM",
        )


class CustomerTemplateTests(unittest.TestCase):
    def setUp(self):
        self.html = email_templates.render_customer_email(
            lookup_plan("gold"),
            "Credit Card",
            "TX-1001",
            club_name="Simone Susinna Fan Club",
            portal_url="https://fanclub.simonesusinna.com/portal",
            now=FIXED_NOW,
        )

    def test_includes_membership_details(self):
        for expected in ("Gold Membership", "€999.99", "Credit Card", "TX-1001",
                         "Monday, October 19, 2026"):
            with self.subTest(expected=expected):
                self.assertIn(expected, self.html)

    def test_uses_plan_accent_color_and_portal_link(self):
        self.assertIn("background-color: #ffd700", self.html)
        self.assertIn('href="https://fanclub.simonesusinna.com/portal"', self.html)
        self.assertIn("2026 Simone Susinna Fan Club", self.html)


class AdminTemplateTests(unittest.TestCase):
    def render(self, submission):
        return email_templates.render_admin_email(
            lookup_plan(submission.plan),
            submission,
            club_name="Simone Susinna Fan Club",
            now=FIXED_NOW,
        )

    def test_card_payment_has_no_gift_card_section(self):
        html = self.render(make_submission())

        self.assertIn("Monday, October 19, 2026 at 04:07 PM", html)
        self.assertIn("fan@example.com", html)
        self.assertIn("Gold Membership (€999.99)", html)
        self.assertIn('id="payment-received"', html)
        self.assertNotIn('id="action-required"', html)
        self.assertNotIn("Gift Card PIN", html)

    def test_gift_card_payment_shows_full_pin_and_banner(self):
        html = self.render(make_submission(payment_method="Gift Card", gift_card_pin="4321"))

        self.assertIn('id="action-required"', html)
        self.assertNotIn('id="payment-received"', html)
        self.assertIn('<div class="pin-highlight">4321</div>', html)
        self.assertIn("<td>No</td>", html)

    def test_gift_card_without_pin_shows_placeholder(self):
        html = self.render(make_submission(payment_method="Gift Card"))
        self.assertIn('<div class="pin-highlight">N/A</div>', html)

    def test_submitted_values_are_escaped(self):
        html = self.render(make_submission(transaction_id="<script>alert(1)</script>"))

        self.assertNotIn("<script>", html)
        self.assertIn("&lt;script&gt;", html)


class AttachmentNameTests(unittest.TestCase):
    def test_keeps_original_extension(self):
        self.assertEqual(
            email_templates.proof_attachment_name("TX-2002", "card.png"), "giftcard_TX-2002.png"
        )

    def test_defaults_to_jpg(self):
        self.assertEqual(
            email_templates.proof_attachment_name("TX-2002", "card"), "giftcard_TX-2002.jpg"
        )

    def test_path_components_are_dropped(self):
        name = email_templates.proof_attachment_name("../../TX", "photo.gif")
        self.assertNotIn("/", name)
        self.assertTrue(name.endswith(".gif"))

    def test_transaction_id_is_kept_verbatim(self):
        self.assertEqual(
            email_templates.proof_attachment_name("TX 42", "card.jpg"), "giftcard_TX 42.jpg"
        )
        self.assertEqual(
            email_templates.proof_attachment_name("Ü-77", "card.png"), "giftcard_Ü-77.png"
        )

    def test_control_characters_are_dropped(self):
        name = email_templates.proof_attachment_name("TX\r\n42", "card.png")
        self.assertEqual(name, "giftcard_TX42.png")


class SubjectTests(unittest.TestCase):
    def test_subjects(self):
        plan = lookup_plan("silver")
        submission = make_submission(plan="silver", payment_method="Gift Card")

        self.assertEqual(email_templates.customer_subject(plan), "🎉 Your Silver Membership Confirmation")
        self.assertEqual(
            email_templates.admin_subject(plan, submission),
            "⚠️ New Silver Membership Purchase (Gift Card) - fan@example.com",
        )

    def test_line_breaks_collapse_to_spaces(self):
        plan = lookup_plan("gold\nvip")
        submission = make_submission(plan="gold\nvip", payment_method="Gift\r\nCard")

        self.assertEqual(email_templates.customer_subject(plan), "🎉 Your gold vip Confirmation")
        self.assertEqual(
            email_templates.admin_subject(plan, submission),
            "⚠️ New gold vip Purchase (Gift Card) - fan@example.com",
        )


if __name__ == "__main__":
    unittest.main()
