"""
Species Manager Module

This module implements the SpeciesManager class.
The manager coordinates the speciation process and manages the lifecycle
of all species across generations.

Speciation:
New structural innovations often have lower initial fitness and would be
quickly eliminated if they had to compete with the whole population. Organizing
the population into species - groups of genetically similar genomes that share
offspring among themselves - gives novel structures time to optimize.

How Speciation Works:
1. Species are visited from the smallest to the largest (by previous size)
2. Each genome joins the first species whose representative is closer than the threshold
3. A genome that fits no species founds a new one, as its representative
4. Species left without members are removed
5. The threshold moves one step, depending on how the species count compares with the target
6. Each species spawns offspring proportional to its mean fitness and size

Classes:
    SpeciesManager: Manages all species, handles speciation and offspring allocation
"""

from itertools  import count
from statistics import mean
from typing     import TYPE_CHECKING

from loguru import logger

from recurneat.run.config   import Config
from recurneat.pool.species import Species
if TYPE_CHECKING:
    from recurneat.genotype import Genome

class SpeciesManager:
    """
    Manages the collection of species and speciation process across generations.

    The SpeciesManager organizes the population into species based on genetic
    similarity, tracks species across generations, and computes how many offspring
    each species gets. The compatibility threshold is self-tuning: after each
    speciation pass it moves one fixed step, driven by the species count
    compared with 'target_species'.

    Public Attributes:
        species:                 Dictionary mapping species IDs to Species instances
        compatibility_threshold: Current distance threshold for same-species membership

    Public Methods:
        speciate(genomes):                                Assign all genomes to species
        assign(genome):                                   Assign a single genome to a species
        remove(genomes):                                  Remove genomes from their species
        adjust_threshold():                               Move the threshold one step
        update_fitness():                                 Calculate and update all species fitnesses
        calculate_offspring_allocations(population_size): Determine offspring count per species
    """

    def __init__(self, config: Config):
        """
        Initialize the Species Manager.

        Parameters:
            config: Stores configuration parameters.
        """
        self.species                : dict[int, Species] = {}                              # species ID => Species instance
        self.compatibility_threshold: float              = config.compatibility_threshold
        self._id_generator                               = count(1)                        # generates species IDs
        self._config                                     = config                          # stores config parameters

    def speciate(self, genomes: list['Genome']) -> None:
        """
        Assign all genomes to species based on genetic similarity.

        Existing species are visited from the smallest to the largest, judging by
        their size after the previous pass; each genome joins the first one whose
        representative is closer than the compatibility threshold. Genomes that fit
        nowhere found new species, which are candidates for the genomes that follow.

        Postconditions:
            - Every genome is assigned to exactly one species
            - Each species has at least one member
            - Species representatives are from the current genomes

        Parameters:
            genomes: The genomes to speciate
        """
        ordered = sorted(self.species.values(), key=lambda spec: spec.member_count)
        for spec in ordered:
            spec.init_for_next_pass()

        for genome in genomes:
            spec = self._find_species(genome, ordered)
            if spec is None:
                ordered.append(self._new_species(genome))
            else:
                spec.add(genome)

        self._remove_empty_species()
        for spec in self.species.values():
            spec.refresh_representative()
        self.adjust_threshold()

        # Error check: all genomes must have been allocated to a species
        assigned_count = sum(spec.member_count for spec in self.species.values())
        assert assigned_count == len(genomes), "Lost genomes during speciation!"

    def assign(self, genome: 'Genome') -> Species:
        """
        Assign a single genome to a species, without revisiting the other genomes.

        Parameters:
            genome: The genome to assign

        Returns:
            the species the genome joined (possibly a new one)
        """
        ordered = sorted(self.species.values(), key=lambda spec: spec.member_count)
        spec    = self._find_species(genome, ordered)
        if spec is None:
            return self._new_species(genome)
        spec.add(genome)
        return spec

    def remove(self, genomes: list['Genome']) -> None:
        """
        Remove genomes from their species; species left without members are removed.
        """
        for genome in genomes:
            spec = self.species.get(genome.species)
            if spec is not None:
                spec.remove(genome)

        self._remove_empty_species()
        for spec in self.species.values():
            if all(member is not spec.representative for member in spec.members):
                spec.refresh_representative()

    def _find_species(self, genome: 'Genome', ordered: list[Species]) -> Species | None:
        for spec in ordered:
            if spec.distance_to(genome) < self.compatibility_threshold:
                return spec
        return None

    def _new_species(self, genome: 'Genome') -> Species:
        spec = Species(next(self._id_generator), genome, self._config)
        self.species[spec.id] = spec
        logger.debug(f"Created species {spec.id}")
        return spec

    def _remove_empty_species(self) -> None:
        extinct_species = [spec_id for spec_id, spec in self.species.items() if spec.member_count == 0]
        for spec_id in extinct_species:
            del self.species[spec_id]
        if extinct_species:
            logger.debug(f"Removed extinct species {extinct_species}")

    def adjust_threshold(self) -> None:
        """
        Move the compatibility threshold one fixed step, clamped to [threshold_min, threshold_max]:
        down when there are more species than 'target_species', up when there are fewer.
        """
        num_species = len(self.species)
        threshold   = self.compatibility_threshold

        if num_species > self._config.target_species:
            threshold -= self._config.threshold_step
        elif num_species < self._config.target_species:
            threshold += self._config.threshold_step

        threshold = min(self._config.threshold_max, max(self._config.threshold_min, threshold))
        if threshold != self.compatibility_threshold:
            logger.debug(f"Compatibility threshold {self.compatibility_threshold:.3f} -> {threshold:.3f} "
                         f"({num_species} species, target {self._config.target_species})")
        self.compatibility_threshold = threshold

    def update_fitness(self) -> None:
        """
        Calculates and updates the fitness for all species.
        This method assumes that the fitness of all genomes has already been set.
        """
        for spec in self.species.values():
            spec.update_fitness()

    def calculate_offspring_allocations(self, population_size: int) -> dict[int, int]:
        """
        Calculate how many offspring each species should produce.

        Each species gets a raw quota proportional to its size and to how its mean
        fitness compares to the average of all species means:
            raw = round(species_mean / global_mean * species_size)
        The raw quotas are then rescaled so they add up to the population size
        (up to rounding, i.e. within +/- the number of species). If the global mean
        is zero, species keep their current size.

        When 'drop_stagnant_species' is set, stagnant species get no offspring,
        except the species with the best mean fitness.

        Parameters:
            population_size: the target number of genomes

        Returns:
            Dictionary mapping species_id to number of offspring to produce
        """
        allocations = {spec_id: 0 for spec_id in self.species}
        eligible    = list(self.species.values())
        if not eligible:
            return allocations

        if self._config.drop_stagnant_species:
            best     = max(eligible, key=lambda spec: spec.mean_fitness)
            eligible = [spec for spec in eligible if spec is best or not spec.is_stagnant()]

        global_mean = mean(spec.mean_fitness for spec in eligible)

        raw = {}
        for spec in eligible:
            if global_mean > 0:
                raw[spec.id] = max(0, round(spec.mean_fitness / global_mean * spec.member_count))
            else:
                raw[spec.id] = spec.member_count

        total_raw = sum(raw.values())
        if total_raw == 0:
            raw       = {spec.id: spec.member_count for spec in eligible}
            total_raw = sum(raw.values())

        factor = population_size / total_raw
        for spec_id, quota in raw.items():
            allocations[spec_id] = round(quota * factor)

        for spec_id, spec in self.species.items():
            spec.offspring = allocations[spec_id]

        return allocations

    def __str__(self):
        lines = [f"Threshold: {self.compatibility_threshold:.3f}"]
        lines += [str(self.species[spec_id]) for spec_id in sorted(self.species)]
        return "\n".join(lines)
