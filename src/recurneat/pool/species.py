"""
Species Module

This module implements the Species class.
A species represents a cluster of genetically similar genomes
that compete primarily within their own niche.

Classes:
    Species: Represents a single species with members and fitness tracking
"""

import random
from collections import deque
from typing      import TYPE_CHECKING

from recurneat.run.config import Config
if TYPE_CHECKING:
    from recurneat.genotype import Genome

class Species:
    """
    A species representing a cluster of genetically similar genomes.

    The population is divided into species based on genetic similarity, allowing
    different evolutionary niches to develop independently. This protects innovative
    structures from being eliminated by competition with more mature solutions, as
    genomes only share offspring with the members of their own species.

    Each species keeps a representative genome used for distance calculations during
    speciation. A genome joins the first species whose representative is closer than
    the compatibility threshold. Species keep a bounded history of their mean fitness,
    used to detect stagnation.

    Public Attributes:
        id:              Unique species identifier
        representative:  Genome used for distance calculations during speciation
        members:         The genomes that are part of this species
        fitness:         Sum of the fitness of all members
        offspring:       Number of offspring allocated for the next generation
        fitness_history: Mean fitness over the last generations (bounded)

    Public Properties:
        member_count: Number of members
        mean_fitness: Average fitness of the members

    Public Methods:
        init_for_next_pass():     Forget the members, keeping the representative
        add(genome):              Add a member
        remove(genome):           Remove a member
        refresh_representative(): Make the first member the representative
        update_fitness():         Update species fitness and history
        is_stagnant():            Check if species has stopped improving
        distance_to(genome):      Calculate genetic distance to a genome
        select_parents(num):      Draw parent pairs for the next generation
        select_mate(genome):      Draw a mate for a genome

    Life Cycle:
    1. Created when a genome doesn't fit into existing species
    2. Accumulates members during speciation based on genetic similarity
    3. Fitness is calculated as the sum of member fitnesses
    4. Spawns offspring proportional to its mean fitness and size
    5. Representative is updated after each speciation pass
    6. Removed when it has no members left
    """

    def __init__(self, species_id: int, representative: 'Genome', config: Config):
        """
        Initialize a new species.

        Parameters:
            species_id:     unique species identifier
            representative: the Genome that represents this species in the speciation process
            config:         stores configuration parameters
        """
        self._config: Config = config

        # Unique species identifier
        self.id: int = species_id

        # Representative genome for distance calculations during speciation
        self.representative: 'Genome' = representative

        # For now we only have one member: the representative.
        self.members: list['Genome'] = []
        self.add(representative)

        self.fitness        : float        = 0.0
        self.offspring      : int          = 0
        self.fitness_history: deque[float] = deque(maxlen=config.fitness_history_length)

    @property
    def member_count(self) -> int:
        return len(self.members)

    @property
    def mean_fitness(self) -> float:
        return self.fitness / len(self.members) if self.members else 0.0

    def init_for_next_pass(self) -> None:
        """
        Resets the species in preparation of being assigned the genomes of a new pass.
        The representative is kept until the pass is over.
        """
        self.members = []

    def add(self, genome: 'Genome') -> None:
        self.members.append(genome)
        genome.species = self.id

    def remove(self, genome: 'Genome') -> None:
        self.members = [member for member in self.members if member is not genome]

    def refresh_representative(self) -> None:
        if self.members:
            self.representative = self.members[0]

    def update_fitness(self) -> None:
        """
        Recalculate the species fitness from its members and record the mean in the history.
        """
        self.fitness = sum(genome.fitness for genome in self.members)
        self.fitness_history.append(self.mean_fitness)

    def is_stagnant(self) -> bool:
        """
        Check whether the species is stagnant.
        A species is stagnant if its history is full and no later entry
        improved on the oldest one.
        """
        if len(self.fitness_history) < self.fitness_history.maxlen:
            return False
        history = list(self.fitness_history)
        return max(history[1:], default=history[0]) <= history[0]

    def distance_to(self, genome: 'Genome') -> float:
        """
        Calculate the genetic distance between this species and a given genome.
        Uses the species representative for comparison.
        """
        return self.representative.distance(genome)

    def _draw(self, k: int) -> list['Genome']:
        # fitness + 1 keeps zero-fitness genomes eligible
        weights = [max(genome.fitness, 0.0) + 1.0 for genome in self.members]
        return random.choices(self.members, weights=weights, k=k)

    def select_parents(self, num_offspring: int) -> list[tuple['Genome', 'Genome']]:
        """
        Draw the parent pairs of this species' offspring.

        Parents are drawn (with replacement) with probability proportional to
        fitness + 1. If both parents of a pair are the same genome, crossover
        produces a clone of it.

        Parameters:
            num_offspring: Number of offspring this species should produce

        Returns:
            one (parent1, parent2) pair per offspring
        """
        if num_offspring <= 0 or not self.members:
            return []
        return [tuple(self._draw(2)) for _ in range(num_offspring)]

    def select_mate(self, genome: 'Genome') -> 'Genome':
        """
        Draw a mate for 'genome' among the members (the genome itself if it is alone).
        """
        if not self.members:
            return genome
        return self._draw(1)[0]

    def __str__(self):
        return (f"Species {self.id:3d}: {self.member_count:3d} members, "
                f"mean fitness {self.mean_fitness:.4f}, offspring {self.offspring}")
