# rwh/cli/demo.py   (standalone run script)

import logging
import sys
from datetime import date, timedelta

import matplotlib.pyplot as plt
import numpy as np

from rwh import DailyObservation, RainfallSeries, RainwaterAnalyzer, SiteParameters
from rwh.io import read_bom_csv


def synthetic_record(years: int = 10, seed: int = 0) -> RainfallSeries:
    """Wet summers, dry winters; about 5 % of days left unmeasured."""
    rng = np.random.default_rng(seed)
    start = date(2010, 1, 1)
    obs = []
    for i in range(int(years * 365.25)):
        day = start + timedelta(days=i)
        wet_chance = 0.35 + 0.2 * np.cos(2 * np.pi * (day.timetuple().tm_yday / 365.25))
        if rng.random() < 0.05:
            obs.append(DailyObservation(day, missing=True))
        elif rng.random() < wet_chance:
            obs.append(DailyObservation(day, float(rng.gamma(0.8, 9.0))))
        else:
            obs.append(DailyObservation(day, 0.0))
    return RainfallSeries(obs)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    series = read_bom_csv(sys.argv[1]).series if len(sys.argv) > 1 else synthetic_record()
    site = SiteParameters(roof_area_m2=180, daily_usage_L=500, water_rate_per_kL=3.50)
    analyzer = RainwaterAnalyzer(series, site)

    sec = analyzer.security(confidence=0.95)
    print(f"Recommended tank: {sec.recommended_tank_size_L:,} L")
    print(sec.confidence_statement)
    for o in sec.smaller_tanks:
        print(f"  {o.tank_size_L:>7,} L  {o.description}")
    print(f"Worst dry spell: {sec.dry_spell_impact.date_range}, {sec.dry_spell_impact.tank_impact}")

    opp = analyzer.opportunistic()
    print(opp.to_frame().round(1).to_string(index=False))
    print(f"Best value: {opp.best_value_size_L:,} L")

    analyzer.plot_tank_level(sec.simulation)
    analyzer.plot_dry_spells()
    analyzer.plot_monthly_rainfall()
    plt.show()


if __name__ == "__main__":
    main()
