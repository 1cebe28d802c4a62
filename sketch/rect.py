from pathlib import Path

from sketch._output import output_parser, save
from wireglobe import Globe, color

NAME = Path(__file__).stem
# ローマ〜モスクワを対角とする矩形
ROME = (41.897209, 12.500285)
MOSCOW = (55.782693, 37.615993)


def main(argv: list[str] | None = None) -> Path:
    args = output_parser(NAME).parse_args(argv)
    g = Globe()
    g.draw_graticule(10.0)
    g.draw_land_boundaries()
    g.draw_rect(*ROME, *MOSCOW, color((1.0, 0.0, 0.0)))
    g.center_on(48.0, 25.0)
    return save(g, args, stem=NAME)


if __name__ == "__main__":
    print(main())
