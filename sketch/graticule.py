from pathlib import Path

from sketch._output import output_parser, save
from wireglobe import Globe

NAME = Path(__file__).stem


def main(argv: list[str] | None = None) -> Path:
    args = output_parser(NAME).parse_args(argv)
    g = Globe()
    g.draw_graticule(10.0)
    return save(g, args, stem=NAME)


if __name__ == "__main__":
    print(main())
