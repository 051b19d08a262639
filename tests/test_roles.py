"""Unit tests for role classification."""

from fakes import FakeCreep, make_fighter, make_gatherer, make_medic
from swampbot.arena import BodyPart
from swampbot.managers.roles import Role, classify, is_armed, move_ratio, partition_roster


class TestClassify:
    def test_carry_wins_over_everything(self):
        body = [BodyPart.CARRY, BodyPart.HEAL, BodyPart.ATTACK, BodyPart.MOVE]
        assert classify(body) == Role.GATHERER

    def test_heal_wins_over_attack(self):
        assert classify([BodyPart.HEAL, BodyPart.RANGED_ATTACK, BodyPart.MOVE]) == Role.MEDIC

    def test_melee_and_ranged_are_fighters(self):
        assert classify([BodyPart.ATTACK, BodyPart.MOVE]) == Role.FIGHTER
        assert classify([BodyPart.RANGED_ATTACK]) == Role.FIGHTER

    def test_no_functional_part_is_inert(self):
        assert classify([BodyPart.MOVE, BodyPart.TOUGH, BodyPart.WORK]) == Role.INERT
        assert classify([]) == Role.INERT

    def test_classifier_is_idempotent(self):
        creep = make_medic("m1")
        assert classify(creep.body) == classify(creep.body)


class TestPartitionRoster:
    def test_every_role_present_and_order_kept(self):
        f1, f2 = make_fighter("f1"), make_fighter("f2")
        roster = partition_roster([f1, make_gatherer("g1"), f2])
        assert set(roster) == set(Role)
        assert roster[Role.FIGHTER] == [f1, f2]
        assert [c.id for c in roster[Role.GATHERER]] == ["g1"]
        assert roster[Role.MEDIC] == []

    def test_inert_creeps_are_grouped_separately(self):
        roster = partition_roster([FakeCreep("x", 0, 0, body=[BodyPart.MOVE])])
        assert [c.id for c in roster[Role.INERT]] == ["x"]


class TestBodyHelpers:
    def test_is_armed(self):
        assert is_armed(make_fighter("f"))
        assert not is_armed(make_medic("m"))

    def test_move_ratio(self):
        assert move_ratio(make_medic("m")) == 0.5
        assert move_ratio(FakeCreep("x", 0, 0, body=[])) == 0.0
