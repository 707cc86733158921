"""Column definitions for the movies dataset (Rotten Tomatoes and IMDb attributes)."""

from .base_columns import BaseColumn, ColumnKind, ColumnMetadata, ColumnRole


class MovieColumn(BaseColumn):
    """Column names for the movies dataset (random sample of films released before 2016).

    Columns:
    - ``title``: str - Title of the movie
    - ``title_type``: str - Type of movie (Documentary, Feature Film, TV Movie)
    - ``genre``: str - Genre of the movie
    - ``runtime``: float - Runtime of the movie (minutes)
    - ``mpaa_rating``: str - MPAA rating (G, PG, PG-13, R, NC-17, Unrated)
    - ``studio``: str - Studio that produced the movie
    - ``thtr_rel_year``: int - Year the movie was released in theaters
    - ``thtr_rel_month``: int - Month the movie was released in theaters
    - ``thtr_rel_day``: int - Day of the month the movie was released in theaters
    - ``dvd_rel_year``: int - Year the movie was released on DVD
    - ``dvd_rel_month``: int - Month the movie was released on DVD
    - ``dvd_rel_day``: int - Day of the month the movie was released on DVD
    - ``imdb_rating``: float - Rating on IMDb (1-10)
    - ``imdb_num_votes``: int - Number of votes on IMDb
    - ``critics_rating``: str - Critics rating on Rotten Tomatoes (Certified Fresh, Fresh, Rotten)
    - ``critics_score``: float - Critics score on Rotten Tomatoes (0-100)
    - ``audience_rating``: str - Audience rating on Rotten Tomatoes (Spilled, Upright)
    - ``audience_score``: float - Audience score on Rotten Tomatoes (0-100)
    - ``best_pic_nom``: str - Whether the movie was nominated for a best picture Oscar (yes/no)
    - ``best_pic_win``: str - Whether the movie won a best picture Oscar (yes/no)
    - ``best_actor_win``: str - Whether one of the main actors ever won an Oscar (yes/no)
    - ``best_actress_win``: str - Whether one of the main actresses ever won an Oscar (yes/no)
    - ``best_dir_win``: str - Whether the director ever won an Oscar (yes/no)
    - ``top200_box``: str - Whether the movie is in the Top 200 Box Office list on BoxOfficeMojo (yes/no)
    - ``director``: str - Director of the movie
    - ``actor1``: str - First main actor/actress in the abridged cast
    - ``actor2``: str - Second main actor/actress in the abridged cast
    - ``actor3``: str - Third main actor/actress in the abridged cast
    - ``actor4``: str - Fourth main actor/actress in the abridged cast
    - ``actor5``: str - Fifth main actor/actress in the abridged cast
    - ``imdb_url``: str - Link to IMDb page for the movie
    - ``rt_url``: str - Link to Rotten Tomatoes page for the movie
    """

    # Derived response: mean of rescaled IMDb rating and audience score
    TARGET = "score"
    """Averaged rating score on a 0-100 scale (target variable)."""
    SCORE = TARGET

    # Identifiers / free text
    TITLE = "title"
    STUDIO = "studio"
    DIRECTOR = "director"
    ACTOR1 = "actor1"
    ACTOR2 = "actor2"
    ACTOR3 = "actor3"
    ACTOR4 = "actor4"
    ACTOR5 = "actor5"
    IMDB_URL = "imdb_url"
    RT_URL = "rt_url"

    # Categorical attributes
    TITLE_TYPE = "title_type"
    GENRE = "genre"
    MPAA_RATING = "mpaa_rating"

    # Numeric attributes
    RUNTIME = "runtime"
    """Runtime in minutes."""
    THTR_REL_YEAR = "thtr_rel_year"
    THTR_REL_MONTH = "thtr_rel_month"
    THTR_REL_DAY = "thtr_rel_day"
    DVD_REL_YEAR = "dvd_rel_year"
    DVD_REL_MONTH = "dvd_rel_month"
    DVD_REL_DAY = "dvd_rel_day"
    IMDB_NUM_VOTES = "imdb_num_votes"

    # Awards and box office (yes/no)
    BEST_PIC_NOM = "best_pic_nom"
    BEST_PIC_WIN = "best_pic_win"
    BEST_ACTOR_WIN = "best_actor_win"
    BEST_ACTRESS_WIN = "best_actress_win"
    BEST_DIR_WIN = "best_dir_win"
    TOP200_BOX = "top200_box"

    # Rating sources combined into the target
    IMDB_RATING = "imdb_rating"
    """IMDb rating on a 1-10 scale."""
    AUDIENCE_SCORE = "audience_score"
    """Rotten Tomatoes audience score on a 0-100 scale."""

    # Alternate measurements of the target (leakage)
    CRITICS_RATING = "critics_rating"
    CRITICS_SCORE = "critics_score"
    AUDIENCE_RATING = "audience_rating"

    def metadata(self) -> ColumnMetadata:
        """Get metadata for this column."""
        return _COLUMN_METADATA_MOVIES[self]


GENRE_LEVELS: tuple[str, ...] = (
    "Action & Adventure",
    "Animation",
    "Art House & International",
    "Comedy",
    "Documentary",
    "Drama",
    "Horror",
    "Musical & Performing Arts",
    "Mystery & Suspense",
    "Other",
    "Science Fiction & Fantasy",
)
TITLE_TYPE_LEVELS: tuple[str, ...] = ("Documentary", "Feature Film", "TV Movie")
MPAA_RATING_LEVELS: tuple[str, ...] = ("G", "NC-17", "PG", "PG-13", "R", "Unrated")


def _identifier(original: str, cleaned: str, pretty: str) -> ColumnMetadata:
    return ColumnMetadata(
        original_name=original,
        cleaned_name=cleaned,
        kind=ColumnKind.IDENTIFIER,
        role=ColumnRole.IDENTIFIER,
        pretty_name=pretty,
    )


def _numeric(original: str, cleaned: str, pretty: str, kind: ColumnKind = ColumnKind.NUMERIC) -> ColumnMetadata:
    return ColumnMetadata(
        original_name=original,
        cleaned_name=cleaned,
        kind=kind,
        role=ColumnRole.FEATURE,
        pretty_name=pretty,
    )


def _yes_no(original: str, cleaned: str, pretty: str) -> ColumnMetadata:
    return ColumnMetadata(
        original_name=original,
        cleaned_name=cleaned,
        kind=ColumnKind.BINARY,
        role=ColumnRole.FEATURE,
        pretty_name=pretty,
        levels=("no", "yes"),
        true_label="yes",
    )


_COLUMN_METADATA_MOVIES: dict[MovieColumn, ColumnMetadata] = {
    MovieColumn.TARGET: ColumnMetadata(
        original_name="score",
        cleaned_name="score",
        kind=ColumnKind.NUMERIC,
        role=ColumnRole.TARGET,
        pretty_name="Average Rating Score (0-100)",
    ),
    # Identifiers
    MovieColumn.TITLE: _identifier("title", "title", "Title"),
    MovieColumn.STUDIO: _identifier("studio", "studio", "Studio"),
    MovieColumn.DIRECTOR: _identifier("director", "director", "Director"),
    MovieColumn.ACTOR1: _identifier("actor1", "actor1", "Actor 1"),
    MovieColumn.ACTOR2: _identifier("actor2", "actor2", "Actor 2"),
    MovieColumn.ACTOR3: _identifier("actor3", "actor3", "Actor 3"),
    MovieColumn.ACTOR4: _identifier("actor4", "actor4", "Actor 4"),
    MovieColumn.ACTOR5: _identifier("actor5", "actor5", "Actor 5"),
    MovieColumn.IMDB_URL: _identifier("imdb_url", "imdb_url", "IMDb URL"),
    MovieColumn.RT_URL: _identifier("rt_url", "rt_url", "Rotten Tomatoes URL"),
    # Categorical
    MovieColumn.TITLE_TYPE: ColumnMetadata(
        original_name="title_type",
        cleaned_name="title_type",
        kind=ColumnKind.CATEGORICAL,
        role=ColumnRole.FEATURE,
        pretty_name="Title Type",
        levels=TITLE_TYPE_LEVELS,
    ),
    MovieColumn.GENRE: ColumnMetadata(
        original_name="genre",
        cleaned_name="genre",
        kind=ColumnKind.CATEGORICAL,
        role=ColumnRole.FEATURE,
        pretty_name="Genre",
        levels=GENRE_LEVELS,
    ),
    MovieColumn.MPAA_RATING: ColumnMetadata(
        original_name="mpaa_rating",
        cleaned_name="mpaa_rating",
        kind=ColumnKind.CATEGORICAL,
        role=ColumnRole.FEATURE,
        pretty_name="MPAA Rating",
        levels=MPAA_RATING_LEVELS,
    ),
    # Numeric
    MovieColumn.RUNTIME: _numeric("runtime", "runtime", "Runtime (minutes)"),
    MovieColumn.THTR_REL_YEAR: _numeric(
        "thtr_rel_year",
        "thtr_rel_year",
        "Theater Release (years since earliest)",
        kind=ColumnKind.YEAR,
    ),
    MovieColumn.THTR_REL_MONTH: _numeric("thtr_rel_month", "thtr_rel_month", "Theater Release Month"),
    MovieColumn.THTR_REL_DAY: _numeric("thtr_rel_day", "thtr_rel_day", "Theater Release Day"),
    MovieColumn.DVD_REL_YEAR: _numeric(
        "dvd_rel_year",
        "dvd_rel_year",
        "DVD Release (years since earliest)",
        kind=ColumnKind.YEAR,
    ),
    MovieColumn.DVD_REL_MONTH: _numeric("dvd_rel_month", "dvd_rel_month", "DVD Release Month"),
    MovieColumn.DVD_REL_DAY: _numeric("dvd_rel_day", "dvd_rel_day", "DVD Release Day"),
    MovieColumn.IMDB_NUM_VOTES: _numeric("imdb_num_votes", "imdb_num_votes", "IMDb Votes"),
    # Awards
    MovieColumn.BEST_PIC_NOM: _yes_no("best_pic_nom", "best_pic_nom", "Best Picture Nomination"),
    MovieColumn.BEST_PIC_WIN: _yes_no("best_pic_win", "best_pic_win", "Best Picture Win"),
    MovieColumn.BEST_ACTOR_WIN: _yes_no("best_actor_win", "best_actor_win", "Oscar-winning Actor"),
    MovieColumn.BEST_ACTRESS_WIN: _yes_no("best_actress_win", "best_actress_win", "Oscar-winning Actress"),
    MovieColumn.BEST_DIR_WIN: _yes_no("best_dir_win", "best_dir_win", "Oscar-winning Director"),
    MovieColumn.TOP200_BOX: _yes_no("top200_box", "top200_box", "Top 200 Box Office"),
    # Rating sources
    MovieColumn.IMDB_RATING: ColumnMetadata(
        original_name="imdb_rating",
        cleaned_name="imdb_rating",
        kind=ColumnKind.NUMERIC,
        role=ColumnRole.TARGET,
        pretty_name="IMDb Rating (1-10)",
    ),
    MovieColumn.AUDIENCE_SCORE: ColumnMetadata(
        original_name="audience_score",
        cleaned_name="audience_score",
        kind=ColumnKind.NUMERIC,
        role=ColumnRole.TARGET,
        pretty_name="Audience Score (0-100)",
    ),
    # Leakage
    MovieColumn.CRITICS_RATING: ColumnMetadata(
        original_name="critics_rating",
        cleaned_name="critics_rating",
        kind=ColumnKind.CATEGORICAL,
        role=ColumnRole.EXCLUDED,
        pretty_name="Critics Rating",
    ),
    MovieColumn.CRITICS_SCORE: ColumnMetadata(
        original_name="critics_score",
        cleaned_name="critics_score",
        kind=ColumnKind.NUMERIC,
        role=ColumnRole.EXCLUDED,
        pretty_name="Critics Score (0-100)",
    ),
    MovieColumn.AUDIENCE_RATING: ColumnMetadata(
        original_name="audience_rating",
        cleaned_name="audience_rating",
        kind=ColumnKind.CATEGORICAL,
        role=ColumnRole.EXCLUDED,
        pretty_name="Audience Rating",
    ),
}
