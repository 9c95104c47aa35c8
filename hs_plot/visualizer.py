import logging
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.ticker import FuncFormatter

from hs_core.constants import DEFAULT_PLOT_TEXT
from hs_data import pipeline
from hs_data.sources import PALEO

logger = logging.getLogger("hockeystick")

_FETCH_PALEO = object()


class PaleoVisualizer:
    """
    Two-panel Vostok chart: CO2 concentration stacked over temperature.
    Expects the long-format table produced by the paleo pipeline.
    """

    REQUIRED_COLUMNS = ('age_ice', 'name', 'value')
    X_LIMITS = (423000, 0)  # reversed: oldest ice on the left
    CO2_COLOUR = 'firebrick'
    TEMP_COLOUR = 'dodgerblue'
    LINE_WIDTH = 0.8
    FIG_SIZE_IN = (9.0, 7.0)
    DPI = 150

    def __init__(
        self,
        df: pd.DataFrame,
        plot_text: dict[str, str] | None = None,
        references: tuple[str, ...] | list[str] = PALEO.references,
    ) -> None:
        """
        Args:
            df: Long-format DataFrame with 'age_ice', 'name' and 'value' columns.
            plot_text: Optional overrides for title, subtitle, caption and axis labels.
            references: Citation URLs listed under the caption.
        Raises:
            ValueError: If the DataFrame is empty or None.
            KeyError: If a required column is missing.
        """
        if df is None or df.empty:
            raise ValueError("DataFrame is empty or None.")

        missing = [column for column in self.REQUIRED_COLUMNS if column not in df.columns]
        if missing:
            raise KeyError(f"Missing required columns: {', '.join(missing)}")

        self.df = df
        self.plot_text = DEFAULT_PLOT_TEXT.copy()
        if plot_text:
            self.plot_text.update(plot_text)
        self.references = tuple(references)

    def series(self, name: str) -> pd.DataFrame:
        """Rows for one series, ordered by ice age."""
        return self.df[self.df['name'] == name].sort_values('age_ice')

    def caption_text(self) -> str:
        """Caption line followed by one line per reference."""
        return "\n".join([self.plot_text['caption'], *self.references])

    @staticmethod
    def millennia_formatter(x: float, pos=None) -> str:
        return f"{x / 1000:g}"

    def _plot_series(self, ax: plt.Axes, name: str, colour: str, y_label: str) -> None:
        data = self.series(name)
        if data.empty:
            logger.warning(f"No '{name}' rows to plot")
        ax.plot(data['age_ice'], data['value'], linewidth=self.LINE_WIDTH, color=colour)
        ax.set_xlim(*self.X_LIMITS)
        ax.set_ylabel(y_label)
        ax.grid(True, color='0.9')

    def build_figure(self) -> plt.Figure:
        """Build the stacked CO2/temperature figure."""
        fig, (ax_co2, ax_temp) = plt.subplots(
            2, 1, sharex=True, figsize=self.FIG_SIZE_IN, constrained_layout=True
        )
        self._plot_series(ax_co2, 'co2', self.CO2_COLOUR, self.plot_text['co2_label'])
        self._plot_series(ax_temp, 'temp', self.TEMP_COLOUR, self.plot_text['temp_label'])

        ax_co2.tick_params(labelbottom=False)
        ax_temp.xaxis.set_major_formatter(FuncFormatter(self.millennia_formatter))
        ax_temp.set_xlabel(self.plot_text['x_label'])

        fig.suptitle(
            f"{self.plot_text['title']}\n{self.plot_text['subtitle']}",
            fontsize=14,
            x=0.02,
            ha='left',
        )
        fig.text(0.99, -0.01, self.caption_text(), ha='right', va='top', fontsize=7)
        return fig


def plot_paleo(
    dataset: pd.DataFrame | None = _FETCH_PALEO,
    show: bool = False,
    out_file: Path | str | None = None,
    plot_text: dict[str, str] | None = None,
) -> plt.Figure | None:
    """
    Plot the Vostok ice core table.

    Args:
        dataset: Table from ``get_paleo``; fetched with default settings when
            omitted. None is a no-op.
        show: Display the chart interactively.
        out_file: Optional path to save the chart to.
        plot_text: Optional text overrides.

    Returns:
        The matplotlib Figure, or None when there is no dataset.
    """
    if dataset is _FETCH_PALEO:
        dataset = pipeline.get_paleo()
    if dataset is None:
        return None

    fig = PaleoVisualizer(dataset, plot_text=plot_text).build_figure()
    if out_file is not None:
        out_path = Path(out_file)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(out_path, dpi=PaleoVisualizer.DPI, bbox_inches="tight")
        logger.info(f"Saved paleo chart to {out_path}")
    if show:
        plt.show()
    return fig
