"""
Mock TMDB API responses for testing.

Realistic payloads for the search, movie details and credits endpoints,
used with respx to mock httpx calls and as cached values.
"""

# GET /search/movie?query=alien&primary_release_year=1979&language=en-US&page=1
TMDB_SEARCH_RESPONSE = {
    "page": 1,
    "results": [
        {
            "adult": False,
            "backdrop_path": "/AmR3JG1VQVxU8TfAvljUhfSFUOx.jpg",
            "genre_ids": [27, 878],
            "id": 348,
            "original_language": "en",
            "original_title": "Alien",
            "overview": "During its return to the earth, commercial spaceship Nostromo...",
            "popularity": 95.2,
            "poster_path": "/vfrQk5IPloGg1v9Rzbh2Eg3VGyM.jpg",
            "release_date": "1979-05-25",
            "title": "Alien",
            "video": False,
            "vote_average": 8.2,
            "vote_count": 14000,
        },
        {
            "adult": False,
            "backdrop_path": None,
            "genre_ids": [99],
            "id": 1092004,
            "original_language": "en",
            "original_title": "Alien: The Director's Cut Documentary",
            "overview": "",
            "popularity": 1.4,
            "poster_path": None,
            "release_date": "1979-10-01",
            "title": "Alien: The Director's Cut Documentary",
            "video": True,
            "vote_average": 6.0,
            "vote_count": 3,
        },
    ],
    "total_pages": 1,
    "total_results": 2,
}

TMDB_SEARCH_EMPTY_RESPONSE = {
    "page": 1,
    "results": [],
    "total_pages": 0,
    "total_results": 0,
}

# GET /movie/348?language=en-US
TMDB_MOVIE_DETAILS_RESPONSE = {
    "id": 348,
    "title": "Alien",
    "original_title": "Alien",
    "release_date": "1979-05-25",
    "runtime": 117,
    "genres": [
        {"id": 27, "name": "Horror"},
        {"id": 878, "name": "Science Fiction"},
    ],
    "poster_path": "/vfrQk5IPloGg1v9Rzbh2Eg3VGyM.jpg",
    "backdrop_path": "/AmR3JG1VQVxU8TfAvljUhfSFUOx.jpg",
    "vote_average": 8.2,
}

# GET /movie/348/credits
TMDB_CREDITS_RESPONSE = {
    "id": 348,
    "cast": [
        {
            "id": 10205,
            "name": "Sigourney Weaver",
            "character": "Ellen Ripley",
            "profile_path": "/wTSnfktNBLd6kwQxgvkqYw6vEon.jpg",
            "order": 0,
        },
        {
            "id": 4139,
            "name": "Tom Skerritt",
            "character": "Dallas",
            "profile_path": "/4xLZNK3CzUfFtnzLyKXpeBxYLkw.jpg",
            "order": 1,
        },
        {
            "id": 1397778,
            "name": "Helen Horton",
            "character": "Mother (voice) (uncredited)",
            "profile_path": None,
            "order": 7,
        },
    ],
    "crew": [
        {
            "id": 578,
            "name": "Ridley Scott",
            "department": "Directing",
            "job": "Director",
            "profile_path": "/zABJmN9opmqD4orWl3KSdCaSo7Q.jpg",
        },
        {
            "id": 5026,
            "name": "Dan O'Bannon",
            "department": "Writing",
            "job": "Screenplay",
            "profile_path": None,
        },
        {
            "id": 1729,
            "name": "Jerry Goldsmith",
            "department": "Sound",
            "job": "Original Music Composer",
            "profile_path": "/9QWLWzXkqxLjiPYFhZBUc2pRVBH.jpg",
        },
        {
            "id": 8941,
            "name": "Terry Rawlings",
            "department": "Editing",
            "job": "Editor",
            "profile_path": None,
        },
        {
            "id": 9999,
            "name": "Jane Grip",
            "department": "Crew",
            "job": "Key Grip",
            "profile_path": None,
        },
    ],
}
