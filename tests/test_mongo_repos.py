"""Mongo repositories against an in-process Motor double."""

from __future__ import annotations

from datetime import date

from filmorate_api.db.storage import mongo_storage
from filmorate_api.models.films import Film
from filmorate_api.models.references import Genre, Mpa
from filmorate_api.models.users import User
from filmorate_api.services.film_service import FilmService
from filmorate_api.services.repositories.counters_repo import CountersRepo
from filmorate_api.services.user_service import UserService
from tests.helpers import new_film, new_user


def make_film(**kw) -> Film:
    data = dict(
        name="Test Film",
        description="Test Description",
        release_date=date(2020, 1, 1),
        duration=120,
        mpa=Mpa(id=1),
    )
    data.update(kw)
    return Film(**data)


def make_user(login: str) -> User:
    return User(email=f"{login}@test.com", login=login, name=login,
                birthday=date(1990, 1, 1))


async def test_counters_are_monotonic_per_sequence(mongo_db):
    counters = CountersRepo(mongo_db)
    assert [await counters.next_id("films") for _ in range(3)] == [1, 2, 3]
    assert await counters.next_id("users") == 1


async def test_storage_seeds_references(mongo_db):
    storage = await mongo_storage(mongo_db)
    # повторный запуск не плодит дубли
    await mongo_storage(mongo_db)

    genres = await storage.genres.find_all()
    assert [g.id for g in genres] == [1, 2, 3, 4, 5, 6]
    assert await storage.mpa.find_by_id(3) == Mpa(id=3, name="PG-13")
    assert await storage.mpa.find_by_id(42) is None


async def test_add_and_find_film_by_id(mongo_db):
    storage = await mongo_storage(mongo_db)

    film = await storage.films.add(make_film())
    found = await storage.films.find_by_id(film.id)

    assert found.id == film.id == 1
    assert found.name == "Test Film"
    assert found.release_date == date(2020, 1, 1)
    assert found.mpa == Mpa(id=1, name="G")
    assert await storage.films.find_by_id(999) is None


async def test_film_genres_keep_order_and_are_replaced_on_update(mongo_db):
    storage = await mongo_storage(mongo_db)
    film = await storage.films.add(
        make_film(genres=[Genre(id=2), Genre(id=1)]))

    found = await storage.films.find_by_id(film.id)
    assert [(g.id, g.name) for g in found.genres] == [
        (2, "Драма"), (1, "Комедия")]

    updated = await storage.films.update(
        found.model_copy(update={"genres": [Genre(id=6)], "mpa": None}))
    assert [g.id for g in updated.genres] == [6]
    assert updated.mpa is None


async def test_likes_are_join_rows_and_idempotent(mongo_db):
    storage = await mongo_storage(mongo_db)
    film = await storage.films.add(make_film())

    await storage.films.add_like(film.id, 10)
    await storage.films.add_like(film.id, 10)
    await storage.films.add_like(film.id, 11)
    assert (await storage.films.find_by_id(film.id)).likes == {10, 11}
    assert await mongo_db["film_likes"].count_documents({}) == 2

    await storage.films.remove_like(film.id, 10)
    await storage.films.remove_like(film.id, 99)
    assert (await storage.films.find_by_id(film.id)).likes == {11}

    # update не трогает лайки
    updated = await storage.films.update(
        (await storage.films.find_by_id(film.id)).model_copy(
            update={"name": "Renamed"}))
    assert updated.likes == {11}


async def test_find_all_films_loads_associations(mongo_db):
    storage = await mongo_storage(mongo_db)
    first = await storage.films.add(make_film(genres=[Genre(id=3)]))
    second = await storage.films.add(make_film(name="Other", mpa=None))
    await storage.films.add_like(second.id, 5)

    films = await storage.films.find_all()

    assert [f.id for f in films] == [first.id, second.id]
    assert films[0].genres == [Genre(id=3, name="Мультфильм")]
    assert films[1].likes == {5} and films[1].mpa is None


async def test_users_create_update_and_friends(mongo_db):
    storage = await mongo_storage(mongo_db)
    a = await storage.users.create(make_user("a"))
    b = await storage.users.create(make_user("b"))

    await storage.users.add_friend(a.id, b.id)
    await storage.users.add_friend(a.id, b.id)

    found = await storage.users.find_by_id(a.id)
    assert found.friends == {b.id}
    # ребро направленное: у b друзей нет, пока его не записали
    assert (await storage.users.find_by_id(b.id)).friends == set()

    updated = await storage.users.update(
        found.model_copy(update={"name": "Alpha"}))
    assert updated.name == "Alpha" and updated.friends == {b.id}

    await storage.users.remove_friend(a.id, b.id)
    assert (await storage.users.find_by_id(a.id)).friends == set()
    assert [u.login for u in await storage.users.find_all()] == ["a", "b"]
    assert await storage.users.find_by_id(404) is None


async def test_services_over_mongo_backend(mongo_db):
    storage = await mongo_storage(mongo_db)
    films = FilmService(
        storage.films, storage.users, storage.genres, storage.mpa)
    users = UserService(storage.users)

    a = await users.create(new_user("a"))
    b = await users.create(new_user("b"))
    c = await users.create(new_user("c"))
    await users.add_friend(a.id, c.id)
    await users.add_friend(b.id, c.id)

    # дружба симметрична и в mongo-бэкенде
    assert [u.id for u in await users.get_friends(c.id)] == [a.id, b.id]
    assert [u.id for u in await users.get_common_friends(a.id, b.id)] == [
        c.id]

    film = await films.add(new_film(genres=[{"id": 5}]))
    liked = await films.like(film.id, a.id)
    assert liked.likes == {a.id}
    assert liked.genres == [Genre(id=5, name="Документальный")]

    popular = await films.get_popular_films(1)
    assert [f.id for f in popular] == [film.id]
