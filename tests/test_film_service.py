"""Film service rules: release date, references, likes, popularity."""

from __future__ import annotations

import pytest

from filmorate_api.core.exceptions import NotFoundError, ValidationError
from filmorate_api.models.films import FilmUpdateRequest
from tests.helpers import new_film, new_user


async def test_add_assigns_increasing_ids(film_service):
    first = await film_service.add(new_film(name="A"))
    second = await film_service.add(new_film(name="B"))

    assert first.id == 1
    assert second.id >= first.id + 1


async def test_add_accepts_min_release_date(film_service):
    film = await film_service.add(new_film(releaseDate="1895-12-28"))
    assert film.id is not None


async def test_add_rejects_release_date_before_cinema(film_service):
    with pytest.raises(ValidationError):
        await film_service.add(new_film(releaseDate="1895-12-27"))
    assert await film_service.find_all() == []


async def test_add_resolves_mpa_and_genre_names(film_service):
    film = await film_service.add(
        new_film(mpa={"id": 3}, genres=[{"id": 2}, {"id": 1}, {"id": 2}]))

    assert film.mpa.name == "PG-13"
    assert [(g.id, g.name) for g in film.genres] == [
        (2, "Драма"), (1, "Комедия")]


async def test_add_unknown_mpa_is_not_found(film_service):
    with pytest.raises(NotFoundError):
        await film_service.add(new_film(mpa={"id": 99}))


async def test_add_unknown_genre_is_not_found(film_service):
    with pytest.raises(NotFoundError):
        await film_service.add(new_film(genres=[{"id": 1}, {"id": 42}]))


async def test_update_replaces_fields(film_service):
    film = await film_service.add(new_film())
    body = FilmUpdateRequest.model_validate(
        {**film.model_dump(by_alias=True, mode="json"),
         "name": "Renamed", "genres": [{"id": 4}]})

    updated = await film_service.update(body)

    assert updated.name == "Renamed"
    assert [g.id for g in updated.genres] == [4]
    assert (await film_service.find_by_id(film.id)).name == "Renamed"


async def test_update_unknown_film_is_not_found(film_service):
    body = FilmUpdateRequest.model_validate(
        {**new_film().model_dump(by_alias=True, mode="json"), "id": 7})
    with pytest.raises(NotFoundError):
        await film_service.update(body)


async def test_update_rejects_bad_release_date_without_mutation(
        film_service):
    film = await film_service.add(new_film())
    body = FilmUpdateRequest.model_validate(
        {**film.model_dump(by_alias=True, mode="json"),
         "name": "Old", "releaseDate": "1800-01-01"})

    with pytest.raises(ValidationError):
        await film_service.update(body)
    assert (await film_service.find_by_id(film.id)).name == "Test Film"


async def test_update_keeps_likes(film_service, user_service):
    film = await film_service.add(new_film())
    user = await user_service.create(new_user())
    await film_service.like(film.id, user.id)

    body = FilmUpdateRequest.model_validate(
        {**film.model_dump(by_alias=True, mode="json"), "name": "New"})
    updated = await film_service.update(body)

    assert updated.likes == {user.id}


async def test_like_then_delete_like_restores_likes(
        film_service, user_service):
    film = await film_service.add(new_film())
    user = await user_service.create(new_user())

    liked = await film_service.like(film.id, user.id)
    assert liked.likes == {user.id}

    # повторный лайк ничего не меняет
    assert (await film_service.like(film.id, user.id)).likes == {user.id}

    restored = await film_service.delete_like(film.id, user.id)
    assert restored.likes == set()


async def test_delete_missing_like_is_noop(film_service, user_service):
    film = await film_service.add(new_film())
    user = await user_service.create(new_user())

    assert (await film_service.delete_like(film.id, user.id)).likes == set()


async def test_like_unknown_film_or_user_is_not_found(
        film_service, user_service):
    film = await film_service.add(new_film())
    user = await user_service.create(new_user())

    with pytest.raises(NotFoundError):
        await film_service.like(999, user.id)
    with pytest.raises(NotFoundError):
        await film_service.like(film.id, 999)
    with pytest.raises(NotFoundError):
        await film_service.delete_like(film.id, 999)


async def test_popular_films_sorted_by_likes_and_truncated(
        film_service, user_service):
    users = [await user_service.create(new_user(f"u{i}")) for i in range(3)]
    one = await film_service.add(new_film(name="one"))
    three = await film_service.add(new_film(name="three"))
    two = await film_service.add(new_film(name="two"))

    for user in users:
        await film_service.like(three.id, user.id)
    for user in users[:2]:
        await film_service.like(two.id, user.id)
    await film_service.like(one.id, users[0].id)

    popular = await film_service.get_popular_films(2)

    assert [f.id for f in popular] == [three.id, two.id]


async def test_popular_films_ties_ordered_by_id(film_service):
    ids = [(await film_service.add(new_film(name=str(i)))).id
           for i in range(3)]

    popular = await film_service.get_popular_films(10)

    assert [f.id for f in popular] == ids


async def test_popular_films_requires_positive_count(film_service):
    with pytest.raises(ValidationError):
        await film_service.get_popular_films(0)
