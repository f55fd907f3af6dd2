"""
Unit tests for recurneat.pool.species module.

Genomes are replaced by mocks placed on a line: the distance between
two of them is the distance between their positions.
"""

import pytest
from unittest.mock import Mock

from recurneat.run.config   import Config
from recurneat.pool.species import Species


# ============================================================================
# Fixtures
# ============================================================================

def make_genome(position=0.0, fitness=0.0):
    genome = Mock()
    genome.position = position
    genome.fitness  = fitness
    genome.species  = 0
    genome.distance = lambda other: abs(genome.position - other.position)
    return genome


@pytest.fixture
def mock_config():
    config = Mock(spec=Config)
    config.fitness_history_length = 3
    return config


@pytest.fixture
def species(mock_config):
    representative = make_genome(0.0, fitness=2.0)
    spec = Species(7, representative, mock_config)
    spec.add(make_genome(1.0, fitness=4.0))
    return spec


# ============================================================================
# Membership
# ============================================================================

class TestSpeciesInit:

    def test_representative_is_first_member(self, mock_config):
        genome = make_genome()
        spec = Species(3, genome, mock_config)

        assert spec.id == 3
        assert spec.representative is genome
        assert spec.members == [genome]
        assert genome.species == 3

    def test_counters(self, mock_config):
        spec = Species(3, make_genome(), mock_config)
        assert spec.fitness   == 0.0
        assert spec.offspring == 0
        assert spec.fitness_history.maxlen == 3


class TestMembership:

    def test_add_sets_species_id(self, species):
        genome = make_genome()
        species.add(genome)
        assert genome.species == 7
        assert species.member_count == 3

    def test_remove(self, species):
        member = species.members[1]
        species.remove(member)
        assert species.member_count == 1
        assert member not in species.members

    def test_init_for_next_pass_keeps_representative(self, species):
        representative = species.representative
        species.init_for_next_pass()
        assert species.members == []
        assert species.representative is representative

    def test_refresh_representative(self, species):
        species.init_for_next_pass()
        newcomer = make_genome(5.0)
        species.add(newcomer)
        species.refresh_representative()
        assert species.representative is newcomer

    def test_distance_to_uses_representative(self, species):
        assert species.distance_to(make_genome(2.5)) == 2.5


# ============================================================================
# Fitness
# ============================================================================

class TestFitness:

    def test_update_fitness(self, species):
        species.update_fitness()
        assert species.fitness      == 6.0
        assert species.mean_fitness == 3.0
        assert list(species.fitness_history) == [3.0]

    def test_mean_fitness_of_empty_species(self, species):
        species.init_for_next_pass()
        assert species.mean_fitness == 0.0

    def test_not_stagnant_until_history_full(self, species):
        species.update_fitness()
        species.update_fitness()
        assert not species.is_stagnant()

    def test_stagnant_without_improvement(self, species):
        for _ in range(3):
            species.update_fitness()
        assert species.is_stagnant()

    def test_improvement_prevents_stagnation(self, species):
        species.update_fitness()
        species.members[0].fitness = 10.0
        species.update_fitness()
        species.members[0].fitness = 2.0
        species.update_fitness()
        assert not species.is_stagnant()

    def test_history_is_bounded(self, species):
        for fitness in (1.0, 2.0, 3.0, 4.0):
            species.members[0].fitness = fitness
            species.update_fitness()
        assert len(species.fitness_history) == 3


# ============================================================================
# Parent selection
# ============================================================================

class TestSelection:

    def test_select_parents(self, species):
        pairs = species.select_parents(5)
        assert len(pairs) == 5
        for parent1, parent2 in pairs:
            assert parent1 in species.members
            assert parent2 in species.members

    def test_no_offspring(self, species):
        assert species.select_parents(0) == []

    def test_fitter_members_drawn_more_often(self, species):
        species.members[0].fitness = 0.0
        species.members[1].fitness = 99.0
        parents = [parent for pair in species.select_parents(200) for parent in pair]
        assert parents.count(species.members[1]) > parents.count(species.members[0])

    def test_negative_fitness_still_eligible(self, species):
        for member in species.members:
            member.fitness = -5.0
        assert len(species.select_parents(3)) == 3

    def test_select_mate_alone(self, mock_config):
        genome = make_genome()
        spec = Species(1, genome, mock_config)
        assert spec.select_mate(genome) is genome

    def test_select_mate_from_members(self, species):
        assert species.select_mate(species.members[0]) in species.members


class TestStr:

    def test_str(self, species):
        species.update_fitness()
        assert str(species) == "Species   7:   2 members, mean fitness 3.0000, offspring 0"
