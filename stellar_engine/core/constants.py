"""Tunable constants of the stellar evolution model.

Every literal that shapes the physical model lives here so that the
scaling laws can be audited and swapped without touching the
interpolation logic.  Engine functions accept a ``constants`` argument
that defaults to :data:`DEFAULT_CONSTANTS`.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Model constants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ModelConstants:
    """Immutable set of physical constants and scaling-law coefficients.

    Ranges are stored as ``(low, high)`` tuples.  Fraction pairs for the
    post-main-sequence phases are ``(low_mass, high_mass)`` end points of
    a linear interpolation along the normalised log-mass axis.

    Attributes:
        t_sun: Solar effective temperature in K.
        z_sun: Solar metallicity.
        x_sun: Solar hydrogen mass fraction.
        t_ms_sun_gyr: Solar main-sequence lifetime in Gyr.
        mass_range: Clamp range for the stellar mass (M_sun).
        metallicity_range: Clamp range for the metallicity Z.
        cno_range: Clamp range for the CNO fraction of Z.
        primordial_helium: Helium fraction at Z = 0.
        helium_enrichment: dY/dZ slope of the helium enrichment law.
        helium_range: Clamp range for the helium fraction Y.
        low_mass_break: Mass below which the low-mass L-M exponent applies.
        high_mass_break: Mass at and above which the high-mass exponent applies.
        low_mass_exponent: L-M exponent below ``low_mass_break``.
        mid_mass_exponent: L-M exponent between the two breakpoints.
        high_mass_exponent: L-M exponent above ``high_mass_break``.
        radius_exponent: R-M exponent on the main sequence.
        z_rel_range: Clamp range for Z / Z_sun in metallicity corrections.
        luminosity_z_exponent: Exponent of Z_rel applied to L_ms.
        temperature_z_exponent: Exponent of Z_rel applied to T_eff.
        cno_mass_onset: Mass above which the CNO correction starts.
        cno_mass_full: Mass at which the CNO weight reaches one.
        cno_reference: Reference CNO fraction with zero correction.
        cno_luminosity_gain: Luminosity gain per unit CNO deviation.
        cno_temperature_gain: Temperature gain per unit CNO deviation.
        lifetime_z_exponent: Exponent of Z / Z_sun in the MS lifetime.
        lifetime_z_floor: Metallicity floor used by the lifetime tweak.
        lifetime_luminosity_floor: L_ms floor used by the burn rate.
        lifetime_range_gyr: Clamp range for the MS lifetime in Gyr.
        ns_mass_threshold: Minimum mass of neutron-star progenitors.
        bh_mass_threshold: Minimum mass of black-hole progenitors.
        structural_mass_range: Mass range spanning the log-mass shape axis.
        subgiant_fraction: Subgiant duration as a fraction of t_MS.
        rgb_fraction: RGB duration as a fraction of t_MS.
        hb_fraction: Core helium burning duration as a fraction of t_MS.
        agb_fraction: AGB duration as a fraction of t_MS.
        post_ms_total_fraction: Target total post-MS fraction of t_MS.
        final_phase_scale: Multiplier of the terminal-phase duration law.
        final_phase_mass_exponent: Mass exponent of the terminal-phase law.
        final_phase_cap: Cap on the terminal phase in units of t_MS.
        ms_brightening_coefficient: Scale of the fractional MS brightening,
            ``c M^-e`` clamped to ``ms_brightening_range``.
        ms_brightening_exponent: Mass exponent ``e`` of the MS brightening.
        ms_brightening_range: Clamp range for the MS brightening.
        ms_swelling_coefficient: Scale of the fractional MS radius growth.
        ms_swelling_exponent: Mass exponent of the MS radius growth.
        ms_swelling_range: Clamp range for the MS radius growth.
        ms_end_z_exponent: Z_rel exponent on T_eff at the end of the MS.
        subgiant_luminosity_base: Constant term of the subgiant L factor.
        subgiant_luminosity_coefficient: Mass term scale of the subgiant L factor.
        subgiant_luminosity_exponent: Mass exponent of the subgiant L factor.
        subgiant_radius_base: Constant term of the subgiant R factor.
        subgiant_radius_coefficient: Mass term scale of the subgiant R factor.
        subgiant_radius_exponent: Mass exponent of the subgiant R factor.
        subgiant_z_exponent: Z_rel exponent on T_eff at the subgiant end.
        rgb_log_luminosity_zero: log L of a 1 M_sun RGB tip.
        rgb_log_luminosity_slope: d log L / d log M of the RGB tip.
        rgb_min_dex_above_ms: Minimum height of the tip above log L_ms.
        rgb_max_log_luminosity: Cap on the RGB tip log L.
        rgb_radius_coefficient: RGB tip radius in units of R_ms at 1 M_sun.
        rgb_radius_exponent: Mass exponent of the RGB tip radius.
        rgb_temperature_zero: Nominal RGB temperature at 1 M_sun, in K.
        rgb_temperature_slope: d T / d log M of the nominal RGB temperature.
        rgb_temperature_range: Clamp range for the nominal RGB temperature.
        rgb_z_exponent: Z_rel exponent on the RGB and AGB temperatures.
        hb_luminosity_base: Constant term of the HB / RGB-tip L ratio.
        hb_luminosity_coefficient: Mass term scale of the HB L ratio.
        hb_luminosity_exponent: Mass exponent of the HB L ratio.
        hb_luminosity_range: Clamp range for the HB L ratio.
        hb_radius_base: Constant term of the HB / RGB-tip R ratio.
        hb_radius_coefficient: Mass term scale of the HB R ratio.
        hb_radius_exponent: Mass exponent of the HB R ratio.
        hb_radius_range: Clamp range for the HB R ratio.
        hb_z_exponent: Z_rel exponent on T_eff at the HB end.
        agb_dex_base: Height of the AGB tip above the RGB tip at 1 M_sun, in dex.
        agb_dex_slope: d dex / d log M of the AGB height.
        agb_dex_range: Clamp range for the AGB height.
        agb_min_dex_above_rgb: Minimum AGB height after the cap is applied.
        agb_max_log_luminosity: Cap on the AGB tip log L.
        agb_radius_base: Constant term of the AGB / RGB-tip R ratio.
        agb_radius_coefficient: Mass term scale of the AGB R ratio.
        agb_radius_exponent: Mass exponent of the AGB R ratio.
        agb_radius_range: Clamp range for the AGB R ratio.
        agb_temperature_factor: AGB tip T_eff as a fraction of the RGB one.
        wd_radius_coefficient: White dwarf radius at 1 M_sun, in R_sun.
        wd_radius_exponent: Mass exponent of the white dwarf radius.
        wd_hot_luminosity_coefficient: Hot white dwarf L in units of L_ms.
        wd_hot_luminosity_exponent: Mass exponent of the hot white dwarf L.
        wd_hot_luminosity_range: Clamp range for the hot L / L_ms ratio.
        wd_hot_temperature: Hot white dwarf T_eff at 1 M_sun, in K.
        wd_hot_temperature_exponent: Mass exponent of the hot T_eff.
        wd_cold_luminosity_coefficient: Cold white dwarf L in units of L_ms.
        wd_cold_luminosity_exponent: Mass exponent of the cold white dwarf L.
        wd_cold_luminosity_range: Clamp range for the cold L / L_ms ratio.
        wd_cold_temperature: Cold white dwarf T_eff at solar Z, in K.
        wd_cold_z_exponent: Z_rel exponent on the cold T_eff.
        core_min_log_luminosity: Floor on the core-collapse log L.
        rsg_temperature_zero: Red-supergiant T_eff at 1 M_sun, in K.
        rsg_temperature_slope: d T / d log M of the red-supergiant T_eff.
        rsg_temperature_range: Clamp range for the red-supergiant T_eff.
        wr_dex_above_core: Wolf-Rayet log L above the core-collapse log L.
        wr_log_luminosity_range: Clamp range for the Wolf-Rayet log L.
        wr_temperature_scale: Wolf-Rayet T_eff at the reference mass, in K.
        wr_reference_mass: Reference mass of the Wolf-Rayet T_eff law.
        wr_temperature_exponent: Mass exponent of the Wolf-Rayet T_eff.
        wr_temperature_range: Clamp range for the Wolf-Rayet T_eff.
        log_luminosity_floor: Floor applied to L before taking log10.
        log_temperature_floor: Floor applied to T_eff before taking log10.
    """

    # Solar reference values
    t_sun: float = 5772.0
    z_sun: float = 0.02
    x_sun: float = 0.70
    t_ms_sun_gyr: float = 10.0

    # Input clamps
    mass_range: tuple[float, float] = (0.1, 50.0)
    metallicity_range: tuple[float, float] = (0.0, 0.04)
    cno_range: tuple[float, float] = (0.0, 1.0)

    # Composition
    primordial_helium: float = 0.248
    helium_enrichment: float = 1.7
    helium_range: tuple[float, float] = (0.22, 0.40)

    # Main-sequence structure
    low_mass_break: float = 0.5
    high_mass_break: float = 2.0
    low_mass_exponent: float = 2.3
    mid_mass_exponent: float = 4.0
    high_mass_exponent: float = 3.5
    radius_exponent: float = 0.8
    z_rel_range: tuple[float, float] = (0.1, 3.0)
    luminosity_z_exponent: float = -0.25
    temperature_z_exponent: float = -0.10

    # CNO correction
    cno_mass_onset: float = 1.3
    cno_mass_full: float = 5.0
    cno_reference: float = 0.3
    cno_luminosity_gain: float = 0.4
    cno_temperature_gain: float = 0.15

    # Main-sequence lifetime
    lifetime_z_exponent: float = 0.2
    lifetime_z_floor: float = 1e-4
    lifetime_luminosity_floor: float = 1e-4
    lifetime_range_gyr: tuple[float, float] = (0.003, 200.0)

    # Remnant classification
    ns_mass_threshold: float = 8.0
    bh_mass_threshold: float = 25.0

    # Post-main-sequence phase fractions (low mass, high mass)
    structural_mass_range: tuple[float, float] = (0.5, 50.0)
    subgiant_fraction: tuple[float, float] = (0.05, 0.01)
    rgb_fraction: tuple[float, float] = (0.10, 0.015)
    hb_fraction: tuple[float, float] = (0.10, 0.02)
    agb_fraction: tuple[float, float] = (0.02, 0.005)
    post_ms_total_fraction: tuple[float, float] = (0.27, 0.15)

    # Terminal phase
    final_phase_scale: float = 10.0
    final_phase_mass_exponent: float = -0.7
    final_phase_cap: float = 5.0

    # Main-sequence track keypoints
    ms_brightening_coefficient: float = 0.3
    ms_brightening_exponent: float = 0.3
    ms_brightening_range: tuple[float, float] = (0.05, 0.4)
    ms_swelling_coefficient: float = 0.15
    ms_swelling_exponent: float = 0.2
    ms_swelling_range: tuple[float, float] = (0.03, 0.2)
    ms_end_z_exponent: float = -0.03

    # Subgiant keypoints
    subgiant_luminosity_base: float = 1.5
    subgiant_luminosity_coefficient: float = 1.0
    subgiant_luminosity_exponent: float = 0.3
    subgiant_radius_base: float = 3.0
    subgiant_radius_coefficient: float = 2.0
    subgiant_radius_exponent: float = 0.2
    subgiant_z_exponent: float = -0.05

    # Red giant branch tip
    rgb_log_luminosity_zero: float = 4.0
    rgb_log_luminosity_slope: float = 1.3
    rgb_min_dex_above_ms: float = 0.8
    rgb_max_log_luminosity: float = 5.8
    rgb_radius_coefficient: float = 50.0
    rgb_radius_exponent: float = 0.6
    rgb_temperature_zero: float = 4100.0
    rgb_temperature_slope: float = -400.0
    rgb_temperature_range: tuple[float, float] = (3400.0, 4600.0)
    rgb_z_exponent: float = -0.05

    # Horizontal branch keypoints
    hb_luminosity_base: float = 0.25
    hb_luminosity_coefficient: float = 0.15
    hb_luminosity_exponent: float = -0.3
    hb_luminosity_range: tuple[float, float] = (0.2, 0.5)
    hb_radius_base: float = 0.15
    hb_radius_coefficient: float = 0.1
    hb_radius_exponent: float = -0.2
    hb_radius_range: tuple[float, float] = (0.08, 0.25)
    hb_z_exponent: float = -0.04

    # Asymptotic giant branch keypoints
    agb_dex_base: float = 0.15
    agb_dex_slope: float = 0.25
    agb_dex_range: tuple[float, float] = (0.1, 0.5)
    agb_min_dex_above_rgb: float = 0.05
    agb_max_log_luminosity: float = 6.2
    agb_radius_base: float = 1.3
    agb_radius_coefficient: float = 0.4
    agb_radius_exponent: float = 0.2
    agb_radius_range: tuple[float, float] = (1.2, 2.2)
    agb_temperature_factor: float = 0.9

    # White dwarf cooling track
    wd_radius_coefficient: float = 0.015
    wd_radius_exponent: float = -0.2
    wd_hot_luminosity_coefficient: float = 0.08
    wd_hot_luminosity_exponent: float = 0.7
    wd_hot_luminosity_range: tuple[float, float] = (0.02, 0.3)
    wd_hot_temperature: float = 25000.0
    wd_hot_temperature_exponent: float = 0.05
    wd_cold_luminosity_coefficient: float = 2e-4
    wd_cold_luminosity_exponent: float = 0.3
    wd_cold_luminosity_range: tuple[float, float] = (5e-5, 5e-4)
    wd_cold_temperature: float = 4500.0
    wd_cold_z_exponent: float = -0.05

    # Core-collapse endpoints
    core_min_log_luminosity: float = 4.5
    rsg_temperature_zero: float = 3600.0
    rsg_temperature_slope: float = 200.0
    rsg_temperature_range: tuple[float, float] = (3400.0, 4300.0)
    wr_dex_above_core: float = 0.3
    wr_log_luminosity_range: tuple[float, float] = (5.2, 6.2)
    wr_temperature_scale: float = 50000.0
    wr_reference_mass: float = 25.0
    wr_temperature_exponent: float = 0.15
    wr_temperature_range: tuple[float, float] = (40000.0, 90000.0)

    # Logarithm floors
    log_luminosity_floor: float = 1e-6
    log_temperature_floor: float = 10.0


DEFAULT_CONSTANTS = ModelConstants()


# ---------------------------------------------------------------------------
# Shared numeric helpers
# ---------------------------------------------------------------------------


def clamp(x: float, low: float, high: float) -> float:
    """Clamp *x* into ``[low, high]``."""
    return min(max(x, low), high)


def lerp(a: float, b: float, t: float) -> float:
    """Linearly interpolate between *a* and *b* at parameter *t*.

    Returns *a* exactly at ``t = 0`` and *b* exactly at ``t = 1``.
    """
    return a * (1.0 - t) + b * t
