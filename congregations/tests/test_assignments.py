"""
Test the assignment coordinator: Temple ↔ Pastor consistency, committee
and member assignments, and the delete policy.

Run with:
    python manage.py test congregations.tests.test_assignments -v 2
"""
from unittest.mock import patch

from django.db import DatabaseError
from django.test import TestCase

from congregations import assignments
from congregations.exceptions import (
    DeleteConflict, NotFound, PartialAssignmentFailure, ValidationConflict,
)
from congregations.models import Pastor, Temple
from congregations.store import members, pastors, temples

from .helpers import make_committee, make_member, make_pastor, make_temple


def refreshed(*objs):
    for obj in objs:
        obj.refresh_from_db()
    return objs


class TemplePastorScenarioTest(TestCase):
    """Grace Chapel / Faith House walkthrough."""

    def test_assign_then_conflicting_assignment(self):
        grace = make_temple("Grace Chapel")
        ana   = make_pastor("Ana", "Ruiz")

        assignments.assign_pastor(grace.pk, ana.pk)
        refreshed(grace, ana)
        self.assertEqual(grace.principal_pastor_id, ana.pk)
        self.assertEqual(ana.temple_id, grace.pk)

        faith = make_temple("Faith House")
        with self.assertRaises(ValidationConflict) as ctx:
            assignments.assign_pastor(faith.pk, ana.pk)

        self.assertEqual(ctx.exception.details["existingTempleId"], grace.pk)
        self.assertIn("Grace Chapel", ctx.exception.message)

        refreshed(grace, faith, ana)
        self.assertIsNone(faith.principal_pastor_id)
        self.assertEqual(grace.principal_pastor_id, ana.pk)
        self.assertEqual(ana.temple_id, grace.pk)


class TemplePastorReassignmentTest(TestCase):

    def setUp(self):
        self.temple = make_temple()
        self.old    = make_pastor("Ana", "Ruiz")
        self.new    = make_pastor("Pedro", "Lopez")
        assignments.assign_pastor(self.temple.pk, self.old.pk)

    # ── Inverse pointers ────────────────────────────────────
    def test_reassign_moves_inverse_pointer(self):
        """The old pastor is released and the new one points at the temple."""
        assignments.assign_pastor(self.temple.pk, self.new.pk)
        refreshed(self.temple, self.old, self.new)

        self.assertEqual(self.temple.principal_pastor_id, self.new.pk)
        self.assertEqual(self.new.temple_id, self.temple.pk)
        self.assertIsNone(self.old.temple_id)

    def test_unassign_clears_both_sides(self):
        assignments.assign_pastor(self.temple.pk, None)
        refreshed(self.temple, self.old)

        self.assertIsNone(self.temple.principal_pastor_id)
        self.assertIsNone(self.old.temple_id)

    def test_assign_is_idempotent(self):
        """Assigning the same pastor twice leaves the same state."""
        assignments.assign_pastor(self.temple.pk, self.new.pk)
        first = (
            Temple.objects.get(pk=self.temple.pk).principal_pastor_id,
            Pastor.objects.get(pk=self.new.pk).temple_id,
            Pastor.objects.get(pk=self.old.pk).temple_id,
        )
        assignments.assign_pastor(self.temple.pk, self.new.pk)
        second = (
            Temple.objects.get(pk=self.temple.pk).principal_pastor_id,
            Pastor.objects.get(pk=self.new.pk).temple_id,
            Pastor.objects.get(pk=self.old.pk).temple_id,
        )
        self.assertEqual(first, second)

    def test_principal_pastors_stay_unique(self):
        other = make_temple("Faith House")
        assignments.assign_pastor(other.pk, self.new.pk)
        with self.assertRaises(ValidationConflict):
            assignments.assign_pastor(other.pk, self.old.pk)

        assigned = list(
            Temple.objects.exclude(principal_pastor=None).values_list("principal_pastor_id", flat=True)
        )
        self.assertEqual(len(assigned), len(set(assigned)))

    # ── Validation ──────────────────────────────────────────
    def test_dangling_pastor_rejected(self):
        with self.assertRaises(ValidationConflict):
            assignments.assign_pastor(self.temple.pk, "missing")
        refreshed(self.temple)
        self.assertEqual(self.temple.principal_pastor_id, self.old.pk)

    def test_unknown_temple_is_not_found(self):
        with self.assertRaises(NotFound):
            assignments.assign_pastor("missing", self.new.pk)

    # ── Partial failure ─────────────────────────────────────
    def test_failed_pastor_sync_rolls_back_temple(self):
        """A failure linking the new pastor leaves nothing half-written."""
        with patch("congregations.assignments._link_pastor", side_effect=DatabaseError("boom")):
            with self.assertRaises(PartialAssignmentFailure):
                assignments.assign_pastor(self.temple.pk, self.new.pk)

        refreshed(self.temple, self.old, self.new)
        self.assertEqual(self.temple.principal_pastor_id, self.old.pk)
        self.assertEqual(self.old.temple_id, self.temple.pk)
        self.assertIsNone(self.new.temple_id)

    def test_unique_collision_after_validation_is_conflict(self):
        """A pastor claimed between validation and save maps to ValidationConflict."""
        other = make_temple("Faith House")
        with patch("congregations.assignments.validate_pastor_assignment"):
            with self.assertRaises(ValidationConflict):
                assignments.assign_pastor(other.pk, self.old.pk)

        refreshed(self.temple, other, self.old)
        self.assertIsNone(other.principal_pastor_id)
        self.assertEqual(self.temple.principal_pastor_id, self.old.pk)
        self.assertEqual(self.old.temple_id, self.temple.pk)


class PastorSideAssignmentTest(TestCase):

    def setUp(self):
        self.temple = make_temple()
        self.pastor = make_pastor()

    def test_assign_temple_from_pastor_side(self):
        pastor = assignments.assign_temple_to_pastor(self.pastor.pk, self.temple.pk)
        refreshed(self.temple)

        self.assertEqual(pastor.temple_id, self.temple.pk)
        self.assertEqual(self.temple.principal_pastor_id, self.pastor.pk)

    def test_unassign_from_pastor_side_clears_temple(self):
        assignments.assign_temple_to_pastor(self.pastor.pk, self.temple.pk)
        pastor = assignments.assign_temple_to_pastor(self.pastor.pk, None)
        refreshed(self.temple)

        self.assertIsNone(pastor.temple_id)
        self.assertIsNone(self.temple.principal_pastor_id)

    def test_pastor_leading_another_temple_is_rejected(self):
        other = make_temple("Faith House")
        assignments.assign_temple_to_pastor(self.pastor.pk, self.temple.pk)
        with self.assertRaises(ValidationConflict):
            assignments.assign_temple_to_pastor(self.pastor.pk, other.pk)

    def test_stale_inverse_pointer_is_cleared(self):
        Pastor.objects.filter(pk=self.pastor.pk).update(temple=self.temple)
        pastor = assignments.assign_temple_to_pastor(self.pastor.pk, None)
        self.assertIsNone(pastor.temple_id)


class SaveWithReferencesTest(TestCase):

    def test_save_temple_with_pastor(self):
        ana = make_pastor()
        fields = {
            "name": "Grace Chapel", "address": "Calle 1", "city": "Cali",
            "region": "Valle", "country": "Colombia",
            "founding_date": "1990-01-01",
        }
        temple = assignments.save_temple(None, fields, ana.pk)
        refreshed(ana)
        self.assertEqual(temple.principal_pastor_id, ana.pk)
        self.assertEqual(ana.temple_id, temple.pk)

    def test_save_temple_with_taken_pastor_creates_nothing(self):
        grace = make_temple("Grace Chapel")
        ana   = make_pastor()
        assignments.assign_pastor(grace.pk, ana.pk)

        fields = {
            "name": "Faith House", "address": "Calle 2", "city": "Cali",
            "region": "Valle", "country": "Colombia",
            "founding_date": "1999-01-01",
        }
        with self.assertRaises(ValidationConflict):
            assignments.save_temple(None, fields, ana.pk)
        self.assertFalse(Temple.objects.filter(name="Faith House").exists())

    def test_save_pastor_with_temple_replaces_previous_pastor(self):
        temple = make_temple()
        old    = make_pastor("Ana", "Ruiz")
        assignments.assign_pastor(temple.pk, old.pk)

        fields = {
            "first_name": "Pedro", "last_name": "Lopez", "phone": "3001234567",
            "email": "pedro@example.com", "birth_date": "1970-01-01",
            "ordination_date": "1995-01-01", "ministerial_license": "LIC-PL",
            "status": Pastor.Status.ACTIVE,
        }
        new = assignments.save_pastor(None, fields, temple.pk)
        refreshed(temple, old)

        self.assertEqual(temple.principal_pastor_id, new.pk)
        self.assertEqual(new.temple_id, temple.pk)
        self.assertIsNone(old.temple_id)

    def test_save_member_with_dangling_temple_rejected(self):
        fields = {
            "first_names": "Luis", "last_names": "Gomez", "email": "luis@example.com",
            "birth_date": "1992-01-01", "status": "BAPTIZED",
        }
        with self.assertRaises(ValidationConflict):
            assignments.save_member(None, fields, "missing")


class MemberAndCommitteeAssignmentTest(TestCase):

    def setUp(self):
        self.temple    = make_temple()
        self.member    = make_member()
        self.committee = make_committee()

    def test_assign_member_temple(self):
        member = assignments.assign_member_temple(self.member.pk, self.temple.pk)
        self.assertEqual(member.temple_id, self.temple.pk)

        member = assignments.assign_member_temple(self.member.pk, None)
        self.assertIsNone(member.temple_id)

    def test_assign_member_dangling_temple_rejected(self):
        with self.assertRaises(ValidationConflict):
            assignments.assign_member_temple(self.member.pk, "missing")

    def test_assign_committee_leader_and_temple(self):
        assignments.assign_committee_leader(self.committee.pk, self.member.pk)
        assignments.assign_committee_temple(self.committee.pk, self.temple.pk)
        refreshed(self.committee)

        self.assertEqual(self.committee.leader_id, self.member.pk)
        self.assertEqual(self.committee.temple_id, self.temple.pk)

    def test_member_may_lead_many_committees(self):
        other = make_committee("Worship")
        assignments.assign_committee_leader(self.committee.pk, self.member.pk)
        assignments.assign_committee_leader(other.pk, self.member.pk)
        self.assertEqual(self.member.led_committees.count(), 2)

    def test_assign_committee_dangling_leader_rejected(self):
        with self.assertRaises(ValidationConflict):
            assignments.assign_committee_leader(self.committee.pk, "missing")


class DeletePolicyTest(TestCase):

    def test_pastor_delete_blocked_until_temple_cleared(self):
        temple = make_temple()
        ana    = make_pastor()
        assignments.assign_pastor(temple.pk, ana.pk)

        with self.assertRaises(DeleteConflict):
            pastors.delete(ana.pk)

        assignments.assign_pastor(temple.pk, None)
        pastors.delete(ana.pk)
        self.assertFalse(Pastor.objects.filter(pk=ana.pk).exists())

    def test_leader_delete_blocked_until_committee_cleared(self):
        """Luis leads Youth; he can only be deleted once the leadership is cleared."""
        luis  = make_member("Luis", "Gomez")
        youth = make_committee("Youth", leader_id=luis.pk)

        with self.assertRaises(DeleteConflict) as ctx:
            members.delete(luis.pk)
        self.assertEqual(ctx.exception.details["references"][0]["id"], youth.pk)

        assignments.assign_committee_leader(youth.pk, None)
        members.delete(luis.pk)

    def test_temple_delete_blocked_while_referenced(self):
        temple = make_temple()
        member = make_member(temple_id=temple.pk)

        with self.assertRaises(DeleteConflict):
            temples.delete(temple.pk)

        assignments.assign_member_temple(member.pk, None)
        temples.delete(temple.pk)
        self.assertFalse(Temple.objects.filter(pk=temple.pk).exists())

    def test_temple_with_pastor_cannot_be_deleted(self):
        temple = make_temple()
        assignments.assign_pastor(temple.pk, make_pastor().pk)

        with self.assertRaises(DeleteConflict):
            temples.delete(temple.pk)
