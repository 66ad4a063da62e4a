"""Feed group definitions: which venues go into which RSS document."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FeedGroup:
    """
    A named bundle of venues rendered into one RSS document.

    ``venues`` are scraper registry identifiers. A merged group tags every
    item with its venue and is written to ``<name>.xml``; a single-venue
    group is written to its scraper's own feed filename.
    """

    name: str
    title: str
    link: str
    description: str
    venues: tuple[str, ...]
    merged: bool = True
    language: str = "it"


FEED_GROUPS: dict[str, FeedGroup] = {
    "multisala": FeedGroup(
        name="multisala",
        title="Film in programmazione",
        link="https://github.com/",
        description=(
            "RSS unificato: The Space Cinema (Silea), Cinema Multisala Edera, "
            "Cinema Manzoni, Cinergia Conegliano, Cinemazero Pordenone."
        ),
        venues=("space-cinema", "edera", "manzoni", "cinergia", "cinemazero"),
    ),
    "padova": FeedGroup(
        name="padova",
        title="Film in programmazione a Padova",
        link="https://portoastra.it/questa-settimana/",
        description="Programmazione Cinema Rex Padova e Cinema Porto Astra.",
        venues=("cinema-rex", "porto-astra"),
    ),
    "trieste": FeedGroup(
        name="trieste",
        title="Cinema Ariston Trieste - La Cappella Underground",
        link="https://www.lacappellaunderground.org/ariston/programma/",
        description="Programmazione Cinema Ariston - La Cappella Underground",
        venues=("ariston-trieste",),
        merged=False,
    ),
    "rassegne": FeedGroup(
        name="rassegne",
        title="Rassegne",
        link="https://github.com/",
        description="Rassegne di Cinema Cristallo Oderzo, Cinema Edera e Circolo Enrico Pizzuti.",
        venues=("cristallo", "edera-rassegne", "enrico-pizzuti"),
    ),
    "berlinale": FeedGroup(
        name="berlinale",
        title="Berlinale - Berlin International Film Festival",
        link="https://www.berlinale.de/en/programme/on-sale-from-today.html",
        description="Films in the Berlinale programme (on sale / in programme).",
        venues=("berlinale",),
        merged=False,
        language="en",
    ),
    "tarantino": FeedGroup(
        name="tarantino",
        title="The New Beverly Cinema",
        link="https://thenewbev.com/schedule/",
        description=(
            "Schedule and program for The New Beverly Cinema "
            "(Quentin Tarantino's revival theater in Los Angeles)."
        ),
        venues=("new-beverly",),
        merged=False,
        language="en",
    ),
}
