from pathlib import Path

import plotly.graph_objects as go

from error_control.domain_models.dft import BandsResult


def _pretty_label(label: str) -> str:
    return "Γ" if label == "G" else label


def create_band_structure_figure(bands: BandsResult, title: str = "Band Structure") -> go.Figure:
    """
    One line per band, energies relative to ``bands.reference``, with the
    high-symmetry points marked by vertical lines.
    """
    fig = go.Figure()
    for spin, spin_energies in enumerate(bands.energies):
        n_bands = len(spin_energies[0]) if spin_energies else 0
        for band in range(n_bands):
            fig.add_trace(
                go.Scatter(
                    x=bands.x,
                    y=[e[band] - bands.reference for e in spin_energies],
                    mode="lines",
                    line={"color": "royalblue" if spin == 0 else "firebrick"},
                    name=f"Band {band} (spin {spin})",
                )
            )

    for x in bands.special_x:
        fig.add_vline(x=x, line_width=1, line_color="gray")
    fig.add_hline(y=0.0, line_width=1, line_dash="dash", line_color="gray")

    fig.update_layout(
        title=title,
        xaxis={
            "tickmode": "array",
            "tickvals": bands.special_x,
            "ticktext": [_pretty_label(label) for label in bands.special_labels],
        },
        xaxis_title="Wave Vector",
        yaxis_title="Energy (eV)",
        showlegend=False,
    )
    return fig


def create_band_structure_plot(
    bands: BandsResult, title: str = "Band Structure", output_path: Path | None = None
) -> str:
    """
    Creates a band structure plot using Plotly.
    Returns the HTML div string.
    If output_path is provided, saves to HTML file.
    """
    fig = create_band_structure_figure(bands, title)
    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.write_html(output_path)

    return fig.to_html(full_html=False, include_plotlyjs="cdn")  # type: ignore[no-any-return]
