"""
Population Module

This module implements the Population class, the top-level orchestrator of the
evolutionary algorithm. The population owns the genomes, the innovation ledger
and the species, and runs the mutation, reproduction and evaluation waves.

Classes:
    Population: Top-level evolutionary coordinator managing genomes and generations
"""

import random
from joblib import Parallel, delayed

from loguru import logger

from recurneat.genotype                import ConnectionGene, Genome, InnovationLedger, MutationType, NodeKey, NodeType
from recurneat.pool.species_manager    import SpeciesManager
from recurneat.run.config              import Config

def _mutate_genome(genome: Genome, allow_pruning: bool) -> tuple:
    """
    Mutate a genome and return it along with its pending signatures.
    Returning the genome keeps this usable with process-based workers too.
    """
    pending_connection, pending_split = genome.mutate(allow_pruning)
    return genome, pending_connection, pending_split

def _breed(parent1: Genome, parent2: Genome) -> tuple:
    """
    Cross two parents over and mutate the child.
    """
    child = parent1.crossover(parent2)
    pending_connection, pending_split = child.mutate()
    return child, pending_connection, pending_split

def _forward(genome: Genome, inputs: list[float]) -> list[float]:
    return genome.process(inputs)

class Population:
    """
    A population of evolving genomes.

    The Population class represents the top-level container for the evolutionary
    process, managing a collection of genomes and coordinating their evolution.
    Work on individual genomes (mutation, crossover, evaluation) can run in parallel,
    since genomes share no state. The innovation ledger is the only shared resource:
    the genomes of a wave report the signatures of the connections they created,
    and the ledger assigns innovation numbers once the whole wave is done, in the
    order of the genomes, so the outcome does not depend on scheduling.

    Two reproduction modes are supported:
    - generational: the whole population is replaced at once ('spawn_next_generation')
    - continuous:   offspring are requested one at a time ('spawn_offspring'), and
                    genomes flagged as dead are removed on request ('remove_dead')

    Parallelization (the 'num_jobs' arguments):
        num_jobs=1:  Serial (no parallelization)
        num_jobs>1:  Use specified number of worker threads
        num_jobs=-1: Use as many workers as CPU cores

    Public Attributes:
        genomes: List of all Genome objects in the population
        ledger:  The innovation ledger shared by all genomes

    Public Properties:
        species_manager: The SpeciesManager organizing the genomes into species

    Public Methods:
        mutate_all(num_jobs):            Apply one mutation to every genome
        forward(inputs, num_jobs):       Evaluate every genome once
        get_fittest_genome():            Return the genome with highest fitness
        spawn_next_generation(num_jobs): Replace the population with the next generation
        spawn_offspring(parent):         Add a single child of 'parent' to the population
        remove_dead():                   Remove the genomes flagged as not alive
        add_input() / add_output():      Grow every genome by one input/output
    """

    def __init__(self, config: Config):
        """
        Initialize the population with a given number of genomes and split them into species.

        Parameters:
            config: Stores configuration parameters
        """
        self._config = config
        self.ledger  = InnovationLedger(config)

        # Step 1: create a number of identical genomes, each with a
        # network consisting only of unconnected input and output nodes.
        self.genomes: list[Genome] = [Genome(config) for _ in range(config.population_size)]

        # Step 2: add connections to each genome.
        # The manner in which this is done depends on the initialization policy.
        if config.initial_cxn_policy == "mutate":
            self._connect_mutate()
        elif config.initial_cxn_policy == "partial":
            self._connect_partial()
        elif config.initial_cxn_policy == "full":
            self._connect_full()
        else:
            raise ValueError(f"Bad initial connection policy '{config.initial_cxn_policy}'")

        # Split the initial population into species
        self._species_manager = SpeciesManager(config)
        self._species_manager.speciate(self.genomes)
        logger.info(f"Initial population: {len(self.genomes)} genomes, "
                    f"{len(self._species_manager.species)} species")

    @property
    def species_manager(self) -> SpeciesManager:
        return self._species_manager

    def _connect_mutate(self):
        """
        Grow the initial connections through waves of connection-add mutations,
        reconciled by the ledger like any other wave.
        """
        saved_weights = [genome.get_mutation_weights() for genome in self.genomes]

        connection_add_only = [0] * len(MutationType)
        connection_add_only[MutationType.CONNECTION_ADD.value] = 1
        for genome in self.genomes:
            genome.set_mutation_weights(connection_add_only)

        num_waves = (self._config.num_inputs + self._config.num_outputs) // 4 + 1
        for _ in range(num_waves):
            self.mutate_all(allow_pruning=False)

        for genome, weights in zip(self.genomes, saved_weights):
            genome.set_mutation_weights(weights)

    def _connect_partial(self):
        """
        For each genome, connect a fraction of all possible input-output pairs (at least one).
        The connections are chosen at random.
        """
        fraction = self._config.initial_cxn_fraction
        if fraction is None or not 0.0 <= fraction <= 1.0:
            raise ValueError("initial_cxn_fraction must be within [0, 1] for the 'partial' policy")

        for genome in self.genomes:
            all_pairs  = [(inp, out) for inp in self._input_node_keys(genome) for out in genome.output_keys]
            num_conns  = max(1, int(len(all_pairs) * fraction))
            make_pairs = random.sample(all_pairs, num_conns)
            for input_key, output_key in make_pairs:
                self._add_initial_connection(genome, input_key, output_key)
            genome.refresh()

    def _connect_full(self):
        """
        For each genome, connect all inputs nodes (bias included) to all output nodes.
        """
        for genome in self.genomes:
            for input_key in self._input_node_keys(genome):
                for output_key in genome.output_keys:
                    self._add_initial_connection(genome, input_key, output_key)
            genome.refresh()

    @staticmethod
    def _input_node_keys(genome: Genome) -> list[NodeKey]:
        return sorted(node.key for node in genome.node_genes.values() if node.type == NodeType.INPUT)

    def _add_initial_connection(self, genome: Genome, input_key: NodeKey, output_key: NodeKey) -> None:
        innovation = self.ledger.get_innovation_number(input_key, output_key, False)
        weight     = random.uniform(-self._config.weight_init_range, self._config.weight_init_range)
        genome.conn_genes[innovation] = ConnectionGene(input_key, output_key, weight, innovation, self._config)

    def mutate_all(self, num_jobs: int = 1, allow_pruning: bool = True) -> None:
        """
        Apply one mutation to every genome, then reconcile the wave.

        In continuous mode there is no wave: each genome is mutated and
        registered with the ledger in turn, and 'num_jobs' is ignored.

        Parameters:
            num_jobs:      Number of parallel workers for the mutation phase
            allow_pruning: whether the pruning operators may be selected
        """
        if not self._config.generational:
            for genome in self.genomes:
                self.ledger.register(*_mutate_genome(genome, allow_pruning))
            return

        if num_jobs == 1:
            results = [_mutate_genome(genome, allow_pruning) for genome in self.genomes]
        else:
            results = Parallel(num_jobs, prefer="threads")(delayed(_mutate_genome)(genome, allow_pruning)
                                                           for genome in self.genomes)
        self._reconcile(results)

    def _reconcile(self, results: list[tuple]) -> None:
        """
        Take the genomes returned by a wave and resolve their pending signatures, in order.
        """
        self.genomes = [genome for genome, _, _ in results]
        pending = [(index, pending_connection, pending_split)
                   for index, (_, pending_connection, pending_split) in enumerate(results)
                   if pending_connection is not None or pending_split is not None]
        self.ledger.reconcile(self.genomes, pending)

    def forward(self, inputs_per_genome: list[list[float]], num_jobs: int = 1) -> list[list[float]]:
        """
        Evaluate every genome once.

        Parameters:
            inputs_per_genome: one input vector per genome, in population order
            num_jobs:          Number of parallel workers

        Returns:
            one output vector per genome, in population order
        """
        if len(inputs_per_genome) != len(self.genomes):
            raise ValueError(f"Expected {len(self.genomes)} input vectors, got {len(inputs_per_genome)}")

        if num_jobs == 1:
            return [_forward(genome, inputs) for genome, inputs in zip(self.genomes, inputs_per_genome)]

        # Threads, so that the runtime state stays on the genomes
        return Parallel(num_jobs, prefer="threads")(delayed(_forward)(genome, inputs)
                                                    for genome, inputs in zip(self.genomes, inputs_per_genome))

    def get_fittest_genome(self) -> Genome | None:
        """
        Find and return the genome with the highest fitness in the population.

        Returns:
            The genome with the highest fitness value, or None if population is empty
        """
        if not self.genomes:
            return None
        return max(self.genomes, key=lambda genome: genome.fitness)

    def spawn_next_generation(self, num_jobs: int = 1) -> None:
        """
        Replace the population with the next generation.

        Step 1: Offspring Allocation
        - Update the fitness of every species from the fitness of its members
        - Calculate how many offspring each species should produce

        Step 2: Reproduction (parallel)
        - Parents are drawn within each species, in species order
        - Each child is a crossover of its parents, then mutated once

        Step 3: Reconciliation (sequential)
        - The ledger assigns innovation numbers to the new structure, in child order

        Step 4: Speciation
        - Assign all offspring to species based on genetic similarity

        Parameters:
            num_jobs: Number of parallel workers for the reproduction phase

        Raises:
            ValueError: if the population is configured for continuous reproduction
        """
        if not self._config.generational:
            raise ValueError("spawn_next_generation() requires generational reproduction")

        best_fitness = max((genome.fitness for genome in self.genomes), default=0.0)
        self._species_manager.update_fitness()
        allocations = self._species_manager.calculate_offspring_allocations(self._config.population_size)

        # Parents are drawn serially, so that the draws do not depend on scheduling
        pairs = []
        for spec_id, spec in self._species_manager.species.items():
            pairs.extend(spec.select_parents(allocations[spec_id]))
        if not pairs:
            raise RuntimeError("No species was allocated any offspring")

        if num_jobs == 1:
            results = [_breed(parent1, parent2) for parent1, parent2 in pairs]
        else:
            results = Parallel(num_jobs, prefer="threads")(delayed(_breed)(parent1, parent2)
                                                           for parent1, parent2 in pairs)
        self._reconcile(results)

        self._species_manager.speciate(self.genomes)

        logger.info(f"New generation: {len(self.genomes)} genomes, {len(self._species_manager.species)} species, "
                    f"{self.ledger.num_innovations} innovations (previous best fitness {best_fitness:.4f})")

    def spawn_offspring(self, parent: Genome) -> Genome:
        """
        Add a single child of 'parent' to the population (continuous reproduction).

        The second parent is drawn from the species of 'parent', weighted by fitness.
        The child's new structure is registered with the ledger right away, and the
        child joins a species without revisiting the rest of the population.

        Parameters:
            parent: the genome reproducing

        Returns:
            the child, already added to the population

        Raises:
            ValueError: if the population is configured for generational reproduction
        """
        if self._config.generational:
            raise ValueError("spawn_offspring() requires continuous reproduction")

        spec = self._species_manager.species.get(parent.species)
        if spec is None:
            spec = self._species_manager.assign(parent)
        mate = spec.select_mate(parent)

        child, pending_connection, pending_split = _breed(parent, mate)
        self.ledger.register(child, pending_connection, pending_split)

        self._species_manager.assign(child)
        self.genomes.append(child)
        return child

    def remove_dead(self) -> list[Genome]:
        """
        Remove the genomes whose 'alive' flag is False; empty species are removed too.

        Returns:
            the removed genomes

        Raises:
            ValueError: if the population is configured for generational reproduction
        """
        if self._config.generational:
            raise ValueError("remove_dead() requires continuous reproduction")

        dead = [genome for genome in self.genomes if not genome.alive]
        if dead:
            self.genomes = [genome for genome in self.genomes if genome.alive]
            self._species_manager.remove(dead)
            logger.debug(f"Removed {len(dead)} dead genome(s)")
        return dead

    def add_input(self) -> None:
        """
        Activate the next reserved input slot of every genome.
        """
        for genome in self.genomes:
            genome.add_input()

    def add_output(self) -> None:
        """
        Activate the next reserved output slot of every genome.
        """
        for genome in self.genomes:
            genome.add_output()

    def __str__(self):
        return '\n'.join(str(genome) for genome in self.genomes)
