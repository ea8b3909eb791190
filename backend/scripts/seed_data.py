"""Seed script to populate the movie catalog.

Usage:
    PYTHONPATH=backend/src python backend/scripts/seed_data.py populate
    PYTHONPATH=backend/src python backend/scripts/seed_data.py populate --force
    PYTHONPATH=backend/src python backend/scripts/seed_data.py clear
"""

import argparse
import asyncio

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import dispose_engine, get_session_factory
from models import Movie
from schemas.movie import MovieCreate
from services import movie_service

SAMPLE_VIDEO_BASE = 'https://commondatastorage.googleapis.com/gtv-videos-bucket/sample'

MOVIES = [
    {
        'title': 'Big Buck Bunny',
        'description': (
            'Three rodents amuse themselves by harassing creatures of the forest. '
            'However, when they mess with a bunny, he decides to teach them a lesson.'
        ),
        'video_url': f'{SAMPLE_VIDEO_BASE}/BigBuckBunny.mp4',
        'thumbnail_url': 'https://upload.wikimedia.org/wikipedia/commons/7/70/Big.Buck.Bunny.-.Opening.Screen.png',
        'genre': 'Comedy',
        'duration': '10 minutes',
    },
    {
        'title': 'Sintel',
        'description': (
            'A lonely young woman, Sintel, helps and befriends a dragon, whom she calls Scales. '
            'But when he is kidnapped by an adult dragon, Sintel decides to embark on a '
            'dangerous quest to find her lost friend Scales.'
        ),
        'video_url': f'{SAMPLE_VIDEO_BASE}/Sintel.mp4',
        'thumbnail_url': 'http://uhhokay.com/wp-content/uploads/2012/06/sintel-1080p.jpg',
        'genre': 'Adventure',
        'duration': '15 minutes',
    },
    {
        'title': 'Tears of Steel',
        'description': (
            'In an apocalyptic future, a group of soldiers and scientists takes refuge in '
            'Amsterdam to try to stop an army of robots that threatens the planet.'
        ),
        'video_url': f'{SAMPLE_VIDEO_BASE}/TearsOfSteel.mp4',
        'thumbnail_url': 'https://mango.blender.org/wp-content/uploads/2013/05/01_thom_celia_bridge.jpg',
        'genre': 'Action',
        'duration': '12 minutes',
    },
    {
        'title': 'Elephants Dream',
        'description': (
            'Friends Proog and Emo journey inside the folds of a seemingly infinite Machine, '
            'exploring the dark and twisted complex of wires, gears, and cogs.'
        ),
        'video_url': f'{SAMPLE_VIDEO_BASE}/ElephantsDream.mp4',
        'thumbnail_url': 'https://download.blender.org/ED/cover.jpg',
        'genre': 'Sci-Fi',
        'duration': '15 minutes',
    },
]


async def clear_data(session: AsyncSession) -> int:
    """Delete every movie. Returns the number of movies removed."""
    count = (await session.execute(select(func.count()).select_from(Movie))).scalar() or 0
    await session.execute(delete(Movie))
    await session.flush()
    print(f'  Deleted {count} movies')
    return count


async def create_movies(session: AsyncSession) -> None:
    """Insert the sample catalog."""
    for data in MOVIES:
        await movie_service.create_movie(session, MovieCreate(**data))
    print(f'  Created {len(MOVIES)} movies')


async def populate(force: bool = False) -> None:
    """Populate the catalog with seed data."""
    async with get_session_factory()() as session:
        try:
            movie_count = await movie_service.count_movies(session)
            if movie_count > 0:
                if force:
                    print('Existing movies found, clearing first (--force)...')
                    await clear_data(session)
                else:
                    print(
                        f'Catalog already has {movie_count} movies. '
                        f'Use --force to clear and re-seed.'
                    )
                    return

            print('Populating seed data...')
            await create_movies(session)
            await session.commit()
            print('Seed data created successfully.')
        except Exception:
            await session.rollback()
            raise
        finally:
            await dispose_engine()


async def clear() -> None:
    """Remove every movie from the catalog."""
    async with get_session_factory()() as session:
        try:
            await clear_data(session)
            await session.commit()
            print('Clear complete.')
        except Exception:
            await session.rollback()
            raise
        finally:
            await dispose_engine()


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description='Seed the movie catalog.')
    subparsers = parser.add_subparsers(dest='command', required=True)

    populate_parser = subparsers.add_parser('populate', help='Populate the catalog with sample movies')
    populate_parser.add_argument(
        '--force', action='store_true',
        help='Clear existing movies before populating',
    )

    subparsers.add_parser('clear', help='Remove all movies')

    args = parser.parse_args()

    if args.command == 'populate':
        asyncio.run(populate(force=args.force))
    elif args.command == 'clear':
        asyncio.run(clear())


if __name__ == '__main__':
    main()
