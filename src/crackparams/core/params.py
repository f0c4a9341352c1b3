"""Parameter models for fracture simulations.

One frozen pydantic model per namespace, plus the ``CrackParams`` record that
bundles them. Field declaration order is significant: it fixes both the schema
order and the order of the rendered dump. Defaults are tuned for fracture of
diamond-structure silicon.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .types import NameList, Vector3
from .verbosity import Verbosity

DEFAULT_PRINT_PROPERTIES: NameList = (
    "species",
    "pos",
    "hybrid",
    "hybrid_mark",
    "nn",
    "changed_nn",
    "old_nn",
    "md_old_changed_nn",
    "edge_mask",
    "move_mask",
    "load",
)


class Section(BaseModel):
    """Base for namespace sections.

    ``title`` is the heading used in the rendered dump and ``units`` maps
    attribute names to the unit label printed after their value.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: ClassVar[str] = ""
    units: ClassVar[dict[str, str]] = {}


class CrackSection(Section):
    """Geometry and loading of the crack slab (used only when building the slab)."""

    title: ClassVar[str] = "Crack parameters:"
    units: ClassVar[dict[str, str]] = {
        "lattice_guess": "A",
        "width": "A",
        "height": "A",
        "G": "J/m^2",
        "load_interp_length": "A",
        "ramp_length": "A",
        "ramp_end_G": "J/m^2",
        "G_increment": "J/m^2 per load cycle",
        "seed_length": "A",
        "strain_zone_width": "A",
        "vacuum_size": "A",
        "edge_fix_tol": "A",
        "y_shift": "A",
        "seed_embed_tol": "A",
        "graphene_theta": "rad",
        "graphene_notch_width": "A",
        "graphene_notch_height": "A",
    }

    structure: str = Field(default="diamond", description="Slab structure, 'diamond' or 'graphene'")
    element: str = Field(default="Si", description="Element to build the slab from: Si, C or SiC")
    lattice_guess: float = Field(default=5.43, description="Guess at bulk lattice parameter")
    name: str = Field(
        default="(111)[11b0]",
        description="Crack name '(abc)[def]', negative indices marked by a trailing 'b'",
    )
    width: float = Field(default=200.0, description="Width of crack slab")
    height: float = Field(default=100.0, description="Height of crack slab")
    num_layers: int = Field(default=1, description="Number of primitive cells along z")
    G: float = Field(default=2.0, description="Initial energy release rate loading")
    loading: str = Field(
        default="uniform",
        description="'uniform', 'ramp', 'kfield' or 'interp_kfield_uniform'",
    )
    load_interp_length: float = Field(
        default=100.0, description="Length over which k-field blends into uniform strain"
    )
    ramp_length: float = Field(default=100.0, description="Length of ramp for 'ramp' loading")
    ramp_end_G: float = Field(default=1.0, description="Loading at end of ramp")
    initial_loading_strain: float = Field(
        default=0.005, description="Rate of loading, as strain of initial loading"
    )
    G_increment: float = Field(
        default=0.0, description="Rate of loading as increment in G; overrides the strain rate"
    )
    seed_length: float = Field(default=50.0, description="Length of seed crack")
    strain_zone_width: float = Field(default=100.0, description="Distance over which strain increases")
    vacuum_size: float = Field(default=100.0, description="Vacuum around crack slab")
    relax_loading_field: bool = Field(default=True, description="Relax the applied loading field")
    rescale_x_z: bool = Field(default=False, description="Rescale atoms along x by v and z by v2")
    rescale_x: bool = Field(default=False, description="Rescale atoms along x by v")
    edge_fix_tol: float = Field(default=2.7, description="Distance from top/bottom within which atoms are fixed")
    y_shift: float = Field(
        default=0.0, description="Shift aligning y=0 with a vertical bond centre (unknown crack names)"
    )
    seed_embed_tol: float = Field(default=3.0, description="Atoms this close to the tip seed the embed region")
    graphene_theta: float = Field(default=0.0, description="Rotation angle of graphene plane")
    graphene_notch_width: float = Field(default=5.0, description="Width of graphene notch")
    graphene_notch_height: float = Field(default=5.0, description="Height of graphene notch")
    slab_filename: str = Field(default="", description="Input file used instead of generating a slab")


class SimulationSection(Section):
    """High-level task selection."""

    title: ClassVar[str] = "Simulation parameters:"

    task: str = Field(default="md", description="Task to perform: 'md', 'minim', ...")
    seed: int = Field(default=0, description="Random seed, zero for a random one")
    restart: bool = Field(default=False, description="Restart from a checkfile with velocities")
    classical: bool = Field(default=False, description="Purely classical simulation")
    force_initial_load_step: bool = Field(
        default=False, description="Force a load step at the start of the simulation"
    )


class MDSection(Section):
    """Molecular dynamics."""

    title: ClassVar[str] = "MD parameters:"
    units: ClassVar[dict[str, str]] = {
        "time_step": "fs",
        "crust": "A",
        "sim_temp": "K",
        "avg_time": "fs",
        "thermalise_tau": "fs",
        "thermalise_wait_time": "fs",
        "tau": "fs",
        "wait_time": "fs",
        "interval_time": "fs",
        "calc_connect_interval": "fs",
    }

    time_step: float = Field(default=1.0, description="Time step")
    extrapolate_steps: int = Field(default=10, description="Number of steps to extrapolate for")
    crust: float = Field(default=2.0, description="Margin of neighbour cutoff over the MM potential cutoff")
    recalc_connect_factor: float = Field(
        default=0.8, description="Movement, as fraction of crust, before connectivity is recalculated"
    )
    nneigh_tol: float = Field(default=1.3, description="Nearest neighbour tolerance, fraction of covalent radii")
    eqm_coordination: int = Field(default=4, description="Equilibrium bulk coordination number")
    sim_temp: float = Field(default=300.0, description="Langevin thermostat target temperature")
    avg_time: float = Field(default=50.0, description="Averaging time for bonding and neighbours")
    thermalise_tau: float = Field(default=50.0, description="Thermostat time constant while thermalising")
    thermalise_wait_time: float = Field(default=400.0, description="Minimum thermalisation time per load")
    thermalise_wait_factor: float = Field(default=2.0, description="Factor on thermalisation time per load")
    tau: float = Field(default=500.0, description="Thermostat time constant in near-microcanonical MD")
    wait_time: float = Field(default=500.0, description="Minimum wait time between loadings")
    interval_time: float = Field(
        default=100.0, description="Time without topology change before the load is incremented"
    )
    calc_connect_interval: float = Field(default=10.0, description="Interval between connectivity rebuilds")


class MinimSection(Section):
    """Geometry optimisation."""

    title: ClassVar[str] = "Minimisation parameters:"
    units: ClassVar[dict[str, str]] = {
        "tol": "(eV/A)^2",
        "eps_guess": "A",
        "mm_tol": "(eV/A)^2",
        "mm_eps_guess": "A",
    }

    method: str = Field(default="cg", description="'cg' or 'sd'")
    tol: float = Field(default=1e-3, description="Converged when |f|^2 < tol")
    eps_guess: float = Field(default=0.01, description="Initial line search step size")
    max_steps: int = Field(default=1000, description="Maximum number of minimisation steps")
    linminroutine: str = Field(default="LINMIN_DERIV", description="Line minimisation routine")
    minimise_mm: bool = Field(default=False, description="Relax classical degrees of freedom before each QM call")
    mm_method: str = Field(default="cg", description="Method for MM minimisation")
    mm_tol: float = Field(default=1e-6, description="Force tolerance for MM minimisation")
    mm_eps_guess: float = Field(default=0.001, description="Initial step size for MM minimisation")
    mm_max_steps: int = Field(default=1000, description="Maximum cg cycles for MM minimisation")
    mm_linminroutine: str = Field(default="FAST_LINMIN", description="Line minimisation routine for MM")
    mm_args_str: str = Field(default="", description="Args string for the MM calc() call")
    mm_use_n_minim: bool = Field(default=False, description="Use n_minim for MM minimisation")


class IOSection(Section):
    """Input/output."""

    title: ClassVar[str] = "I/O parameters:"
    units: ClassVar[dict[str, str]] = {
        "print_interval": "fs",
        "checkpoint_interval": "fs",
    }

    verbosity: Verbosity = Field(default=Verbosity.NORMAL, description="Output verbosity")
    netcdf: bool = Field(default=False, description="Write NetCDF instead of XYZ")
    print_interval: float = Field(default=10.0, description="Interval between movie frames")
    print_all_properties: bool = Field(default=False, description="Write every atom property to the movie")
    print_properties: NameList = Field(
        default=DEFAULT_PRINT_PROPERTIES, description="Properties written to the movie file"
    )
    checkpoint_interval: float = Field(default=100.0, description="Interval between checkpoint files")
    checkpoint_path: str = Field(default="", description="Directory for checkpoint files")
    mpi_print_all: bool = Field(default=False, description="Print output on all MPI nodes")


class SelectionSection(Section):
    """Choice of the QM region."""

    title: ClassVar[str] = "Selection parameters:"
    units: ClassVar[dict[str, str]] = {
        "ellipse": "A",
        "ellipse_bias": "radius fraction",
        "ellipse_buffer": "A",
        "cutoff_plane": "A",
        "edge_tol": "A",
    }

    max_qm_atoms: int = Field(default=200, description="Maximum number of QM atoms")
    dynamic: bool = Field(default=True, description="Update the QM region during the run")
    ellipse: Vector3 = Field(default=(8.0, 5.0, 10.0), description="Principal radii of selection ellipse")
    ellipse_bias: float = Field(default=0.5, description="Ellipse shift as fraction of the x radius")
    ellipse_buffer: float = Field(default=1.3, description="Hysteresis between inner and outer ellipses")
    cutoff_plane: float = Field(default=10.0, description="Only atoms this close to the tip are candidates")
    directionality: bool = Field(default=True, description="Require good spring directionality in embed region")
    edge_tol: float = Field(default=10.0, description="Slab edge margin ignored for selection")


class ClassicalSection(Section):
    """Classical potential."""

    title: ClassVar[str] = "Classical parameters:"

    args: str = Field(default="IP SW", description="Potential initialisation arguments")
    args_str: str = Field(default="", description="Arguments passed to calc()")
    force_reweight: float = Field(default=1.0, description="Factor on classical forces in the embed region")


class QMSection(Section):
    """QM force evaluation."""

    title: ClassVar[str] = "QM parameters:"
    units: ClassVar[dict[str, str]] = {
        "vacuum_size": "A",
        "hysteretic_buffer_inner_radius": "A",
        "hysteretic_buffer_outer_radius": "A",
    }

    args: str = Field(
        default="FilePot ./castep_driver.py property_list=pos:embed",
        description="Potential initialisation arguments",
    )
    args_str: str = Field(default="", description="Arguments passed to calc()")
    small_clusters: bool = Field(default=False, description="Many small clusters instead of one")
    buffer_hops: int = Field(default=3, description="Bond hops in the buffer region")
    terminate: bool = Field(default=True, description="Terminate clusters with hydrogen")
    force_periodic: bool = Field(default=False, description="Force clusters periodic along z")
    randomise_buffer: bool = Field(default=True, description="Jitter outer buffer atoms")
    even_hydrogens: bool = Field(default=False, description="Keep an even number of terminating hydrogens")
    vacuum_size: float = Field(default=3.0, description="Vacuum around cluster in non-periodic directions")
    calc_force_error: bool = Field(default=False, description="Full QM calculation to measure force error")
    rescale_r: bool = Field(default=False, description="Rescale cluster to the QM lattice constant")
    hysteretic_buffer: bool = Field(default=False, description="Manage the buffer region hysteretically")
    hysteretic_buffer_inner_radius: float = Field(default=5.0, description="Inner radius of hysteretic buffer")
    hysteretic_buffer_outer_radius: float = Field(default=7.0, description="Outer radius of hysteretic buffer")


class FitSection(Section):
    """Adjustable potential fitted to QM forces."""

    title: ClassVar[str] = "Fit parameters:"

    hops: int = Field(default=3, description="Hops from embed region to fit region")
    spring_hops: int = Field(default=3, description="Hops used when building the spring list")
    method: str = Field(default="lotf_adj_pot_svd", description="Force mixing method")


class ForceIntegrationSection(Section):
    """Force integration task."""

    title: ClassVar[str] = "Force integration parameters:"

    end_file: str = Field(default="", description="XYZ file with the final configuration")
    n_steps: int = Field(default=10, description="Number of integration steps")


class QuasiStaticSection(Section):
    """Quasi-static loading task."""

    title: ClassVar[str] = "Quasi static loading parameters:"
    units: ClassVar[dict[str, str]] = {"tip_move_tol": "A"}

    tip_move_tol: float = Field(default=5.0, description="Tip advance that counts as fracture")


class HackSection(Section):
    """System-specific workarounds (e.g. two-dimensional graphene)."""

    title: ClassVar[str] = "Nasty hacks:"

    qm_zero_z_force: bool = Field(default=False, description="Zero the z component of all forces")
    fit_on_eqm_coordination_only: bool = Field(
        default=False, description="Only fit atoms with equilibrium coordination"
    )


class CrackParams(BaseModel):
    """Complete, immutable parameter record for one fracture simulation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    crack: CrackSection = Field(default_factory=CrackSection)
    simulation: SimulationSection = Field(default_factory=SimulationSection)
    md: MDSection = Field(default_factory=MDSection)
    minim: MinimSection = Field(default_factory=MinimSection)
    io: IOSection = Field(default_factory=IOSection)
    selection: SelectionSection = Field(default_factory=SelectionSection)
    classical: ClassicalSection = Field(default_factory=ClassicalSection)
    qm: QMSection = Field(default_factory=QMSection)
    fit: FitSection = Field(default_factory=FitSection)
    force_integration: ForceIntegrationSection = Field(default_factory=ForceIntegrationSection)
    quasi_static: QuasiStaticSection = Field(default_factory=QuasiStaticSection)
    hack: HackSection = Field(default_factory=HackSection)

    def __getitem__(self, key: str) -> Any:
        """Look up a value by fully-qualified key, e.g. ``params["md_time_step"]``."""
        for namespace in type(self).model_fields:
            prefix = namespace + "_"
            if key.startswith(prefix):
                section = getattr(self, namespace)
                attribute = key[len(prefix):]
                if attribute in type(section).model_fields:
                    return getattr(section, attribute)
        raise KeyError(key)

    def flat(self) -> dict[str, Any]:
        """All values keyed by fully-qualified key, in declared order."""
        out: dict[str, Any] = {}
        for namespace in type(self).model_fields:
            section = getattr(self, namespace)
            for attribute in type(section).model_fields:
                out[f"{namespace}_{attribute}"] = getattr(section, attribute)
        return out


__all__ = [
    "DEFAULT_PRINT_PROPERTIES",
    "Section",
    "CrackSection",
    "SimulationSection",
    "MDSection",
    "MinimSection",
    "IOSection",
    "SelectionSection",
    "ClassicalSection",
    "QMSection",
    "FitSection",
    "ForceIntegrationSection",
    "QuasiStaticSection",
    "HackSection",
    "CrackParams",
]
