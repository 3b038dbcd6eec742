import marimo

__generated_with = "0.10.9"
app = marimo.App(width="medium")


@app.cell
def _():
    import marimo as mo

    from error_control.dft import build_structure, compute_bands, run_scf, sample_time_budget
    from error_control.dft.dimensionality import to_attoseconds
    from error_control.domain_models import DFTConfig
    from error_control.utils.plotting import create_band_structure_figure
    return (
        DFTConfig,
        build_structure,
        compute_bands,
        create_band_structure_figure,
        mo,
        run_scf,
        sample_time_budget,
        to_attoseconds,
    )


@app.cell
def _(mo):
    # sidebar --- DO NOT TOUCH THIS LINE
    mo.md(r"""
- [Course overview](index.html)
- [Density-functional theory](11_density_functional_theory.html)
""")
    # sidebar --- DO NOT TOUCH THIS LINE
    return


@app.cell
def _(mo):
    # latex macros --- DO NOT TOUCH THIS LINE
    mo.md(r"""
$\def\resolvent{{\rho}}
\def\spectralradius{{\varrho}}
\def\laplacian{{\Delta}}
\def\contour{C}
\def\eigenspace{{\mathcal E}}
\def\op{\mathcal}
\def\opA{{\mathcal A}}
\def\opH{{\mathcal H}}
\def\hilbert{{\mathscr H}}
\def\graph{G}
\def\boundedoperators{\mathscr B}
\def\bloch{\mathcal B}
\def\indicator{{\mathbf 1}}
\def\im{\operatorname{Im}}
\def\ker{\operatorname{Ker}}$
""")
    # latex macros --- DO NOT TOUCH THIS LINE
    return


@app.cell
def _(mo):
    mo.md(
        r"""
        # Density-functional theory

        Consider a Schrödinger Hamiltonian $\opH = -\frac12 \laplacian + V$ on
        $L^2(\mathbb{R}^{3N})$. Computing the inner products of the Rayleigh quotient
        with a trapezoidal rule using two points per dimension within **one year**
        leaves, for the $N = 28$ electrons of a silicon crystal, this much time per sample:
        """
    )
    return


@app.cell
def _(sample_time_budget, to_attoseconds):
    to_attoseconds(sample_time_budget(28))
    return


@app.cell
def _(mo):
    mo.md(
        r"""
        Mean-field methods such as Kohn-Sham DFT break this curse of dimensionality
        and lead to a **non-linear eigenvalue problem**, solved by a self-consistent
        field (SCF) iteration. We model bulk silicon with the PBE functional, a
        $4 \times 4 \times 4$ Monkhorst-Pack grid and $E_\text{cut} = 20$ Hartree.
        """
    )
    return


@app.cell
def _(DFTConfig, build_structure, run_scf):
    config = DFTConfig(element="Si", functional="PBE", ecut=20.0, kgrid=(4, 4, 4), tol=1e-6)
    silicon = build_structure(config)
    scfres = run_scf(silicon, config)
    return config, scfres, silicon


@app.cell
def _(mo):
    mo.md(
        r"""
        At the fixed-point density $\rho_\ast$ the Hamiltonian
        $-\frac12 \laplacian + V(\rho_\ast)$ is linear, so we can plot its bands
        along the high-symmetry path of the Brillouin zone:
        """
    )
    return


@app.cell
def _(compute_bands, config, create_band_structure_figure, scfres, silicon):
    bands = compute_bands(silicon, scfres, config)
    create_band_structure_figure(bands, title="Silicon (PBE)")
    return (bands,)


if __name__ == "__main__":
    app.run()
