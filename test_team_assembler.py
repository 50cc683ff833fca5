"""
Unit tests for the tiered team assembly algorithm and team model.
"""

import random

import pytest

from config import SUPPORTED_TEAM_SIZES
from domain.models.category_pools import CategoryPools
from domain.models.player import Player, SkillTier, TierSelection
from domain.models.team import Member, Team
from team_assembler import (
    ASSEMBLY_PLANS,
    PartitionError,
    TieredTeamAssembler,
    UnsupportedTeamSizeError,
    validate_partition,
)
from tests.conftest import build_roster, team_shapes


def _pools(roster, seed: int = 7) -> CategoryPools:
    return CategoryPools.build(roster, TierSelection.all_of(roster), random.Random(seed))


def _assemble(roster, team_size: int, seed: int = 7):
    assembler = TieredTeamAssembler(rng=random.Random(seed), strict=True)
    return assembler.assemble(_pools(roster, seed), team_size).teams


class TestSkillTier:
    """Test SkillTier ordering and parsing."""

    def test_tiers_are_ordered(self):
        assert SkillTier.ULTRA_NOOB < SkillTier.NOOB < SkillTier.PRO < SkillTier.ULTRA_PRO

    def test_strongest_first(self):
        assert SkillTier.strongest_first() == [
            SkillTier.ULTRA_PRO,
            SkillTier.PRO,
            SkillTier.NOOB,
            SkillTier.ULTRA_NOOB,
        ]

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("Ultra Noob", SkillTier.ULTRA_NOOB),
            ("ultra_pro", SkillTier.ULTRA_PRO),
            ("UP", SkillTier.ULTRA_PRO),
            ("  noob ", SkillTier.NOOB),
            ("Pro", SkillTier.PRO),
        ],
    )
    def test_from_label(self, label, expected):
        assert SkillTier.from_label(label) == expected

    def test_from_label_unknown(self):
        with pytest.raises(ValueError):
            SkillTier.from_label("Legend")


class TestTeam:
    """Test Team model behaviour."""

    def test_team_requires_members(self):
        with pytest.raises(ValueError):
            Team([])

    def test_members_ordered_strongest_first(self):
        un = Player(id="1", name="Zed", tier=SkillTier.ULTRA_NOOB)
        up = Player(id="2", name="Amy", tier=SkillTier.ULTRA_PRO)
        team = Team.of(un, up)
        assert [m.name for m in team.members] == ["Amy", "Zed"]
        assert team.name == "Amy_Zed"

    def test_name_follows_membership(self):
        """Team name is recomputed whenever a member is replaced."""
        p = Player(id="1", name="Pro", tier=SkillTier.PRO)
        n = Player(id="2", name="Noob", tier=SkillTier.NOOB)
        un = Player(id="3", name="Tiny", tier=SkillTier.ULTRA_NOOB)
        team = Team.of(p, n)

        team.replace_member(team.member_of_tier(SkillTier.NOOB), Member.from_player(un))

        assert team.name == "Pro_Tiny"
        assert team.is_composition(SkillTier.ULTRA_NOOB, SkillTier.PRO)

    def test_replace_unknown_member(self):
        team = Team.of(Player(id="1", name="A", tier=SkillTier.PRO))
        stranger = Member(name="B", player_id="2", tier=SkillTier.NOOB)
        with pytest.raises(ValueError):
            team.replace_member(stranger, stranger)

    def test_leader_is_first_drawn_member(self):
        un = Player(id="1", name="Zed", tier=SkillTier.ULTRA_NOOB)
        up = Player(id="2", name="Amy", tier=SkillTier.ULTRA_PRO)
        assert Team.of(un, up).leader.name == "Zed"

    def test_incoming_member_takes_over_leadership(self):
        up = Player(id="1", name="Amy", tier=SkillTier.ULTRA_PRO)
        n = Player(id="2", name="Ned", tier=SkillTier.NOOB)
        un = Player(id="3", name="Tiny", tier=SkillTier.ULTRA_NOOB)
        team = Team.of(up, n)

        team.replace_member(team.leader, Member.from_player(un))

        assert team.leader.name == "Tiny"
        assert team.name == "Ned_Tiny"

    def test_replacing_other_member_keeps_leader(self):
        up = Player(id="1", name="Amy", tier=SkillTier.ULTRA_PRO)
        n = Player(id="2", name="Ned", tier=SkillTier.NOOB)
        un = Player(id="3", name="Tiny", tier=SkillTier.ULTRA_NOOB)
        team = Team.of(up, n)

        team.replace_member(team.member_of_tier(SkillTier.NOOB), Member.from_player(un))

        assert team.leader.name == "Amy"

    def test_custom_separator(self):
        a = Player(id="1", name="A", tier=SkillTier.PRO)
        b = Player(id="2", name="B", tier=SkillTier.NOOB)
        assert Team.of(a, b, separator=" & ").name == "A & B"

    def test_kills_start_at_zero(self):
        team = Team.of(Player(id="1", name="A", tier=SkillTier.PRO))
        assert team.to_dict() == {"teamName": "A", "players": [{"ign": "A", "kills": 0}]}


class TestSizeRouter:
    """Test dispatching on requested team size."""

    def test_every_supported_size_has_plan(self):
        assert sorted(ASSEMBLY_PLANS) == sorted(SUPPORTED_TEAM_SIZES)

    @pytest.mark.parametrize("team_size", [0, 5, -1])
    def test_unsupported_size_leaves_pools_untouched(self, team_size):
        pools = _pools(build_roster(up=1, p=1, n=1, un=1))
        assembler = TieredTeamAssembler(rng=random.Random(1), strict=True)

        with pytest.raises(UnsupportedTeamSizeError) as exc_info:
            assembler.assemble(pools, team_size)

        assert str(team_size) in str(exc_info.value)
        assert pools.total() == 4


class TestSoloAssembly:
    def test_everyone_plays_alone(self):
        teams = _assemble(build_roster(up=2, p=1, n=1, un=1), team_size=1)
        assert team_shapes(teams) == ["N", "P", "UN", "UP", "UP"]


class TestDuoAssembly:
    """Test duo pairing rules and rebalancing passes."""

    def test_perfectly_matched(self):
        """Two Ultra Pros and two Ultra Noobs pair off one-to-one."""
        teams = _assemble(build_roster(up=2, un=2), team_size=2)
        assert team_shapes(teams) == ["UP+UN", "UP+UN"]

    def test_forced_same_tier_leftover(self):
        """Three Noobs: one Noob pair and one solo Noob."""
        teams = _assemble(build_roster(n=3), team_size=2)
        assert team_shapes(teams) == ["N", "N+N"]

    def test_extreme_tiers_paired_first(self):
        teams = _assemble(build_roster(up=1, p=1, n=1, un=1), team_size=2)
        assert team_shapes(teams) == ["P+N", "UP+UN"]

    def test_ultra_noob_pair_only_without_noob_pairing(self):
        """UN+UN forms only when no P+N or N+N duo exists; the odd one plays solo."""
        teams = _assemble(build_roster(n=1, un=4), team_size=2)
        assert team_shapes(teams) == ["N+UN", "UN", "UN+UN"]

    def test_weak_solo_swapped_for_ultra_pro(self):
        """A leftover Noob takes the Ultra Pro's seat; the Ultra Pro plays solo."""
        teams = _assemble(build_roster(up=1, n=1, un=1), team_size=2)
        assert team_shapes(teams) == ["N+UN", "UP"]

    def test_weak_solo_swapped_for_pro(self):
        teams = _assemble(build_roster(p=2, n=3), team_size=2)
        assert team_shapes(teams) == ["N+N", "P", "P+N"]

    def test_pro_solo_swapped_for_ultra_pro(self):
        teams = _assemble(build_roster(up=1, p=1, un=1), team_size=2)
        assert team_shapes(teams) == ["P+UN", "UP"]


class TestTrioAssembly:
    """Test trio pairing rules and rebalancing passes."""

    def test_one_leader_per_trio(self):
        teams = _assemble(build_roster(up=1, p=1, n=2, un=2), team_size=3)
        assert team_shapes(teams) == ["P+N+UN", "UP+N+UN"]

    def test_doubled_leader(self):
        teams = _assemble(build_roster(up=2, un=1), team_size=3)
        assert team_shapes(teams) == ["UP+UP+UN"]

    def test_same_tier_last_resort(self):
        teams = _assemble(build_roster(p=4), team_size=3)
        assert team_shapes(teams) == ["P", "P+P+P"]

    def test_weak_solo_swapped_out_of_trio(self):
        teams = _assemble(build_roster(up=1, n=2, un=1), team_size=3)
        assert team_shapes(teams) == ["N+N+UN", "UP"]

    def test_weak_solo_swapped_with_pro_trio(self):
        """Without an Ultra Pro trio the Pro leaves its trio; the second weak solo stays."""
        teams = _assemble(build_roster(p=1, n=2, un=2), team_size=3)
        assert team_shapes(teams) == ["N+N+UN", "P", "UN"]

    def test_pro_solo_swapped_with_duo_ultra_pro(self):
        teams = _assemble(build_roster(up=1, p=1, un=1), team_size=3)
        assert team_shapes(teams) == ["P+UN", "UP"]

    def test_noob_duos_only_without_strong_players(self):
        teams = _assemble(build_roster(n=4), team_size=3)
        assert team_shapes(teams) == ["N+N", "N+N"]


class TestSquadAssembly:
    """Test squad pairing rules and rebalancing passes."""

    def test_ideal_squad(self):
        teams = _assemble(build_roster(up=1, p=1, n=1, un=1), team_size=4)
        assert team_shapes(teams) == ["UP+P+N+UN"]

    def test_odd_remainder(self):
        """Five Pros: one full Pro squad and one solo Pro."""
        teams = _assemble(build_roster(p=5), team_size=4)
        assert team_shapes(teams) == ["P", "P+P+P+P"]
        assert max(team.size for team in teams) == 4

    def test_weak_solo_swapped_out_of_squad(self):
        teams = _assemble(build_roster(up=1, p=1, n=1, un=2), team_size=4)
        assert team_shapes(teams) == ["P+N+UN+UN", "UP"]

    def test_squad_gives_up_only_its_leader(self):
        """After losing its Ultra Pro a squad keeps its Pro; the second weak solo stays solo."""
        teams = _assemble(build_roster(up=1, p=1, n=1, un=3), team_size=4)
        assert team_shapes(teams) == ["P+N+UN+UN", "UN", "UP"]

    def test_weak_solo_swapped_with_pro_led_squad(self):
        """A Pro-led squad gives up one Pro, never both."""
        teams = _assemble(build_roster(p=2, n=1, un=3), team_size=4)
        assert team_shapes(teams) == ["P", "P+N+UN+UN", "UN"]

    @pytest.mark.parametrize("seed", range(10))
    def test_no_squad_left_without_strong_player(self, seed):
        teams = _assemble(build_roster(up=1, p=1, n=1, un=3), team_size=4, seed=seed)
        squads = [team for team in teams if team.size == 4]
        assert all(team.has_tier(SkillTier.ULTRA_PRO) or team.has_tier(SkillTier.PRO) for team in squads)

    def test_falls_back_to_trios_and_duos(self):
        teams = _assemble(build_roster(up=2, n=1, un=2), team_size=4)
        assert team_shapes(teams) == ["UP+N+UN", "UP+UN"]


class TestValidatePartition:
    """Test the partition invariant check."""

    def test_accepts_valid_partition(self):
        roster = build_roster(up=1, un=1)
        players = roster.all_players()
        validate_partition([Team.of(*players)], players, team_size=2)

    def test_rejects_oversized_team(self):
        players = build_roster(p=3).all_players()
        with pytest.raises(PartitionError):
            validate_partition([Team.of(*players)], players, team_size=2)

    def test_rejects_dropped_player(self):
        players = build_roster(p=2).all_players()
        with pytest.raises(PartitionError):
            validate_partition([Team.of(players[0])], players, team_size=2)

    def test_rejects_duplicate_player(self):
        players = build_roster(p=2).all_players()
        teams = [Team.of(players[0]), Team.of(players[0], players[1])]
        with pytest.raises(PartitionError):
            validate_partition(teams, players, team_size=2)
