"""
Tests for the store document models.
"""
import unittest

from orgusers.models import AssignmentStatus, OrganizationAssignment, Persona, Role


class TestOrganizationAssignmentFromDict(unittest.TestCase):
    """Test loading assignments from flat store records."""

    def test_aliases_map_to_fields(self):
        """
        Test that store keys (personaId, roleId, ...) populate the python fields.
        """
        assignment = OrganizationAssignment.from_dict({
            'id': 'a1',
            'personaId': 'p1',
            'businessOrganizationId': 'org-1',
            'roleId': 'r1',
            'status': 'APPROVED',
        })

        self.assertEqual(assignment.id, 'a1')
        self.assertEqual(assignment.persona_id, 'p1')
        self.assertEqual(assignment.business_organization_id, 'org-1')
        self.assertEqual(assignment.role_id, 'r1')
        self.assertIs(assignment.status, AssignmentStatus.APPROVED)
        self.assertTrue(assignment.is_active)

    def test_unknown_status_is_kept_raw(self):
        """
        Test that a status outside the enum stays a plain string.
        """
        assignment = OrganizationAssignment.from_dict({'id': 'a1', 'status': 'ARCHIVED'})

        self.assertEqual(assignment.status, 'ARCHIVED')
        self.assertFalse(assignment.is_active)

    def test_unknown_keys_go_to_extra(self):
        """
        Test that keys outside the model are kept in ``extra``.
        """
        assignment = OrganizationAssignment.from_dict({
            'id': 'a1', 'personaId_linked': {'email': 'ana@example.com'}})

        self.assertEqual(assignment.extra, {'personaId_linked': {'email': 'ana@example.com'}})


class TestAsDict(unittest.TestCase):
    """Test converting models back to store dicts."""

    def test_as_dict_uses_aliases_and_skips_projections(self):
        """
        Test that projections (email, role label) are never written back.
        """
        assignment = OrganizationAssignment(
            id='a1', persona_id='p1', status=AssignmentStatus.DECLINED,
            persona_email='ana@example.com', role_label='Admin')

        data = assignment.as_dict()

        self.assertEqual(data['personaId'], 'p1')
        self.assertEqual(data['status'], 'DECLINED')
        self.assertNotIn('persona_email', data)
        self.assertNotIn('role_label', data)

    def test_as_dict_without_aliases(self):
        persona = Persona(id='p1', email='ana@example.com', business_organization_id='org-1')

        self.assertEqual(persona.as_dict(use_aliases=False), {
            'id': 'p1', 'email': 'ana@example.com', 'business_organization_id': 'org-1'})

    def test_role_fields(self):
        self.assertEqual(Role.fields(), ['id', 'name', 'label'])

    def test_default_id_is_generated(self):
        self.assertEqual(len(Role().id), 32)
        self.assertNotEqual(Role().id, Role().id)


if __name__ == '__main__':
    unittest.main()
