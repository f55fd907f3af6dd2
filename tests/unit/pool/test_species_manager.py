"""
Unit tests for recurneat.pool.species_manager module.

Genomes are replaced by mocks placed on a line: the distance between
two of them is the distance between their positions.
"""

import pytest
from unittest.mock import Mock

from recurneat.run.config           import Config
from recurneat.pool.species         import Species
from recurneat.pool.species_manager import SpeciesManager


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
    config.compatibility_threshold = 3.0
    config.target_species          = 5
    config.threshold_step          = 0.1
    config.threshold_min           = 0.3
    config.threshold_max           = 10.0
    config.fitness_history_length  = 2
    config.drop_stagnant_species   = False
    return config


@pytest.fixture
def manager(mock_config):
    return SpeciesManager(mock_config)


@pytest.fixture
def two_species(manager, mock_config):
    """Species 1: six members of fitness 2. Species 2: four members of fitness 1."""
    spec_a = Species(1, make_genome(0.0, 2.0), mock_config)
    for _ in range(5):
        spec_a.add(make_genome(0.0, 2.0))
    spec_b = Species(2, make_genome(10.0, 1.0), mock_config)
    for _ in range(3):
        spec_b.add(make_genome(10.0, 1.0))
    manager.species = {1: spec_a, 2: spec_b}
    return manager


# ============================================================================
# Speciation
# ============================================================================

class TestSpeciate:

    def test_clusters(self, manager):
        genomes = [make_genome(p) for p in (0, 1, 10, 11, 20)]
        manager.speciate(genomes)

        assert len(manager.species) == 3
        assert genomes[0].species == genomes[1].species
        assert genomes[2].species == genomes[3].species
        assert len({genomes[0].species, genomes[2].species, genomes[4].species}) == 3

    def test_every_genome_assigned_once(self, manager):
        genomes = [make_genome(p) for p in range(0, 40, 2)]
        manager.speciate(genomes)

        members = [member for spec in manager.species.values() for member in spec.members]
        assert len(members) == len(genomes)
        for genome in genomes:
            assert genome in manager.species[genome.species].members

    def test_representatives_from_current_pass(self, manager):
        manager.speciate([make_genome(0), make_genome(10)])
        newcomers = [make_genome(1), make_genome(11)]
        manager.speciate(newcomers)

        for spec in manager.species.values():
            assert spec.representative in newcomers

    def test_smaller_species_visited_first(self, manager):
        manager.speciate([make_genome(p) for p in (0, 1, 10, 11, 20)])
        manager.compatibility_threshold = 6.0

        between = make_genome(15)
        near_first = make_genome(0)
        manager.speciate([between, near_first])

        # 15 is within reach of both 10 and 20; the species of 20 had a single member
        assert between.species == 3
        assert near_first.species == 1
        assert set(manager.species) == {1, 3}
        assert manager.species[3].representative is between

    def test_species_ids_not_reused(self, manager):
        manager.speciate([make_genome(0)])
        manager.speciate([make_genome(100)])
        assert set(manager.species) == {2}


class TestAssign:

    def test_joins_existing_species(self, manager):
        manager.speciate([make_genome(0)])
        genome = make_genome(1)
        spec = manager.assign(genome)
        assert spec.id == 1
        assert genome in spec.members

    def test_founds_new_species(self, manager):
        manager.speciate([make_genome(0)])
        genome = make_genome(50)
        spec = manager.assign(genome)
        assert spec.id == 2
        assert spec.representative is genome


class TestRemove:

    def test_empty_species_removed(self, manager):
        genomes = [make_genome(0), make_genome(50)]
        manager.speciate(genomes)
        manager.remove([genomes[1]])
        assert set(manager.species) == {1}

    def test_representative_replaced_when_removed(self, manager):
        genomes = [make_genome(0), make_genome(1)]
        manager.speciate(genomes)
        manager.remove([genomes[0]])
        assert manager.species[1].representative is genomes[1]


# ============================================================================
# Compatibility threshold
# ============================================================================

class TestThreshold:

    def test_raised_when_too_few_species(self, manager):
        manager.speciate([make_genome(0)])
        assert manager.compatibility_threshold == pytest.approx(3.1)

    def test_lowered_when_too_many_species(self, manager, mock_config):
        mock_config.target_species = 2
        manager.speciate([make_genome(p) for p in (0, 10, 20)])
        assert manager.compatibility_threshold == pytest.approx(2.9)

    def test_unchanged_on_target(self, manager, mock_config):
        mock_config.target_species = 2
        manager.speciate([make_genome(0), make_genome(10)])
        assert manager.compatibility_threshold == 3.0

    def test_clamped_to_minimum(self, manager, mock_config):
        mock_config.target_species = 1
        manager.compatibility_threshold = 0.35
        manager.speciate([make_genome(p) for p in (0, 10)])
        assert manager.compatibility_threshold == 0.3

    def test_clamped_to_maximum(self, manager):
        manager.compatibility_threshold = 9.95
        manager.speciate([make_genome(0)])
        assert manager.compatibility_threshold == 10.0


# ============================================================================
# Offspring allocation
# ============================================================================

class TestOffspringAllocation:

    def test_proportional_to_mean_fitness_and_size(self, two_species):
        two_species.update_fitness()
        allocations = two_species.calculate_offspring_allocations(10)

        # global mean 1.5: raw quotas round(2/1.5*6) = 8 and round(1/1.5*4) = 3, rescaled by 10/11
        assert allocations == {1: 7, 2: 3}
        assert two_species.species[1].offspring == 7
        assert two_species.species[2].offspring == 3

    def test_zero_fitness_keeps_sizes(self, two_species):
        for spec in two_species.species.values():
            for member in spec.members:
                member.fitness = 0.0
        two_species.update_fitness()
        assert two_species.calculate_offspring_allocations(10) == {1: 6, 2: 4}

    def test_total_close_to_population_size(self, manager):
        genomes = [make_genome(p, fitness=p % 7 + 0.5) for p in range(0, 60, 2)]
        manager.speciate(genomes)
        manager.update_fitness()

        allocations = manager.calculate_offspring_allocations(30)
        assert abs(sum(allocations.values()) - 30) <= len(manager.species)
        assert all(quota >= 0 for quota in allocations.values())

    def test_stagnant_species_dropped(self, two_species, mock_config):
        mock_config.drop_stagnant_species = True
        two_species.update_fitness()
        two_species.update_fitness()
        assert two_species.species[2].is_stagnant()

        allocations = two_species.calculate_offspring_allocations(10)
        assert allocations == {1: 10, 2: 0}

    def test_stagnant_species_kept_by_default(self, two_species):
        two_species.update_fitness()
        two_species.update_fitness()
        allocations = two_species.calculate_offspring_allocations(10)
        assert allocations[2] > 0

    def test_no_species(self, manager):
        assert manager.calculate_offspring_allocations(10) == {}
