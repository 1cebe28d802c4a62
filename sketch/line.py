from pathlib import Path

from sketch._output import output_parser, save
from wireglobe import Globe, color

NAME = Path(__file__).stem
BRISTOL = (51.453349, -2.588323)
JFK = (40.645423, -73.903879)


def main(argv: list[str] | None = None) -> Path:
    args = output_parser(NAME).parse_args(argv)
    g = Globe()
    g.draw_graticule(10.0)
    g.draw_land_boundaries()
    g.draw_line(*BRISTOL, *JFK, color((1.0, 0.0, 0.0)))
    g.center_on(50.244440, -37.207949)
    return save(g, args, stem=NAME)


if __name__ == "__main__":
    print(main())
