import marimo

__generated_with = "0.10.9"
app = marimo.App(width="medium")


@app.cell
def _():
    import marimo as mo
    return (mo,)


@app.cell
def _(mo):
    # sidebar --- DO NOT TOUCH THIS LINE
    mo.md("**Error control in scientific modeling**\n" + (mo.notebook_dir() / "sidebar.md").read_text())
    # sidebar --- DO NOT TOUCH THIS LINE
    return


@app.cell
def _(mo):
    # latex macros --- DO NOT TOUCH THIS LINE
    mo.md((mo.notebook_dir() / "latex_macros.md").read_text())
    # latex macros --- DO NOT TOUCH THIS LINE
    return


@app.cell
def _(mo):
    mo.md(
        r"""
        # MATH-500: Error control in scientific modelling

        ## Summary
        Errors are ubiquitous in computational science as neither models nor numerical
        techniques are perfect. With respect to eigenvalue problems motivated from
        materials science and atomistic modelling we discuss,
        implement and apply numerical techniques for estimating simulation error.

        ## Content
        * Important eigenvalue problems in materials science
        * Motivation for studying errors in eigenvalue problems
        * Residual-error relationships for eigenvalue problems
        * Perturbation theory and parametrised eigenvalue problems
        * Discretisation error and plane-wave basis sets
        * Non-linear eigenvalue problems: density-functional theory
        """
    )
    return


if __name__ == "__main__":
    app.run()
