from typing import List, Optional
import io
import base64
import logging
import warnings

import numpy as np
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns

from models.common_models import PreparedSeries

warnings.filterwarnings("ignore", category=UserWarning)

logger = logging.getLogger(__name__)

CHART_COLORS = [
    (75 / 255, 192 / 255, 192 / 255, 0.6),
    (255 / 255, 99 / 255, 132 / 255, 0.6),
    (54 / 255, 162 / 255, 235 / 255, 0.6),
    (255 / 255, 206 / 255, 86 / 255, 0.6),
    (153 / 255, 102 / 255, 255 / 255, 0.6),
]


def _label_text(labels: List) -> List[str]:
    # Category axis: every label is drawn as text, in row order
    return ["" if label is None else str(label) for label in labels]


def _colors(n: int) -> List:
    return [CHART_COLORS[i % len(CHART_COLORS)] for i in range(n)]


def _plot_radar(fig, series: PreparedSeries, labels: List[str]) -> None:
    ax = fig.add_subplot(111, polar=True)
    n = len(series.values)
    if n == 0:
        return
    angles = np.linspace(0, 2 * np.pi, n, endpoint=False).tolist()
    values = list(series.values)
    # close the polygon
    ax.plot(angles + angles[:1], values + values[:1], color=CHART_COLORS[0][:3])
    ax.fill(angles + angles[:1], values + values[:1], color=CHART_COLORS[0])
    ax.set_xticks(angles)
    ax.set_xticklabels(labels)


def render_chart(series: PreparedSeries) -> Optional[str]:
    """
    Draw a prepared series as a PNG and return it base64 encoded.
    Every call draws on a new figure, so nothing from a previous render
    leaks in. Returns None when drawing fails.
    """
    labels = _label_text(series.labels)
    positions = list(range(len(labels)))

    logger.debug("Rendering %s chart with %d points", series.chart_type, len(series.values))

    fig = plt.figure(figsize=(8, 5))

    try:
        if series.chart_type in ("bar", "line", "scatter") and not series.values:
            ax = fig.add_subplot(111)

        elif series.chart_type == "bar":
            ax = fig.add_subplot(111)
            sns.barplot(x=positions, y=series.values, palette=_colors(len(positions)), ax=ax)

        elif series.chart_type == "line":
            ax = fig.add_subplot(111)
            sns.lineplot(x=positions, y=series.values, marker="o", color=CHART_COLORS[0][:3], ax=ax)

        elif series.chart_type == "scatter":
            ax = fig.add_subplot(111)
            sns.scatterplot(x=positions, y=series.values, color=CHART_COLORS[0][:3], ax=ax)

        elif series.chart_type in ("pie", "doughnut"):
            ax = fig.add_subplot(111)
            if series.values:
                wedgeprops = {"width": 0.5} if series.chart_type == "doughnut" else None
                ax.pie(
                    [abs(v) for v in series.values],
                    labels=labels,
                    colors=_colors(len(labels)),
                    wedgeprops=wedgeprops,
                )
            ax.axis("equal")

        elif series.chart_type == "radar":
            _plot_radar(fig, series, labels)

        else:
            logger.warning("Unknown chart type %r", series.chart_type)
            return None

        if series.has_axes and series.chart_type != "radar":
            ax.set_xticks(positions)
            ax.set_xticklabels(labels, rotation=45, ha="right")
            ax.set_xlabel(series.x_title)
            ax.set_ylabel(series.y_title)
            ax.set_ylim(bottom=min(0.0, min(series.values, default=0.0)))

        fig.suptitle(series.title)

        buffer = io.BytesIO()
        fig.tight_layout()
        fig.savefig(buffer, format="png")
        buffer.seek(0)
        return base64.b64encode(buffer.read()).decode("utf-8")

    except Exception:
        logger.exception("Failed to render %s chart", series.chart_type)
        return None

    finally:
        plt.close(fig)
