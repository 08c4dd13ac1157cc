"""CapLearn -- Streamlit UI.

Import a video by upload or YouTube URL, follow its subtitles word by word,
look up definitions, and build an exportable vocabulary list to tag, review
and quiz on. Saved words live in the browser session only.
"""

from __future__ import annotations

import streamlit as st

from src.api.models import FormattedSubtitles, SubtitleSegment
from src.export.subtitles import SUBTITLE_FORMATS, format_clock, parse_subtitles
from src.export.words import WORD_FORMATS
from src.ui.api_client import check_health, transcribe_youtube, upload_video
from src.vocabulary.dictionary import DictionaryLookupError, lookup_word, normalize_word
from src.vocabulary.models import DictionaryEntry, SavedWord, Vocabulary
from src.vocabulary.quiz import MIN_QUIZ_WORDS, QUIZ_LENGTH, Quiz, QuizMode, build_quiz, result_message
from src.vocabulary.stats import vocabulary_stats

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(page_title="CapLearn", layout="wide")

if "vocabulary" not in st.session_state:
    st.session_state.vocabulary = Vocabulary()
if "subtitles" not in st.session_state:
    st.session_state.subtitles = None
if "video" not in st.session_state:
    st.session_state.video = None
if "start_time" not in st.session_state:
    st.session_state.start_time = 0
if "selected_word" not in st.session_state:
    st.session_state.selected_word = ""
if "quiz" not in st.session_state:
    st.session_state.quiz = None
if "reveal" not in st.session_state:
    st.session_state.reveal = False
if "last_choice_correct" not in st.session_state:
    st.session_state.last_choice_correct = False

vocabulary: Vocabulary = st.session_state.vocabulary


@st.cache_data(show_spinner=False)
def cached_lookup(word: str) -> DictionaryEntry | None:
    return lookup_word(word)


def show_definition(word: str) -> None:
    """Dictionary panel for the selected word, with a save action."""
    st.subheader(word)
    try:
        entry = cached_lookup(word)
    except DictionaryLookupError as e:
        st.error(str(e))
        return

    if entry is None:
        st.info("No definition found.")
    else:
        if entry.phonetic:
            st.caption(entry.phonetic)
        if entry.audio:
            st.audio(entry.audio)
        for meaning in entry.meanings:
            st.markdown(f"**{meaning.part_of_speech}**")
            for d in meaning.definitions[:3]:
                st.write(f"- {d.definition}")
                if d.example:
                    st.caption(f'"{d.example}"')
            if meaning.synonyms:
                st.caption("Synonyms: " + ", ".join(meaning.synonyms[:8]))

    if word in vocabulary:
        st.success("Saved")
    elif st.button("Save word", key=f"save_{word}"):
        vocabulary.add(SavedWord(word=word, entry=entry))
        st.rerun()


def segment_label(segment: SubtitleSegment) -> str:
    return f"[{format_clock(segment.start)}] {segment.text.strip()}"


# ---------------------------------------------------------------------------
# Sidebar -- navigation + API status
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("CapLearn")
    st.markdown("---")

    page = st.radio(
        "Navigate",
        ["Import Video", "Subtitles", "Saved Words", "Quiz", "Stats"],
        label_visibility="collapsed",
    )

    st.markdown("---")
    st.metric("Saved words", len(vocabulary))

    # API connection indicator
    api_healthy = check_health()
    if api_healthy:
        st.markdown(":green_circle: API connected")
    else:
        st.markdown(":red_circle: API unreachable")

# ---------------------------------------------------------------------------
# Page: Import Video
# ---------------------------------------------------------------------------
if page == "Import Video":
    st.header("Import Video")
    upload_tab, youtube_tab, file_tab = st.tabs(["Upload", "YouTube", "Subtitle file"])

    with upload_tab:
        uploaded_file = st.file_uploader(
            "Choose a video (max 100 MB)",
            type=["mp4", "mov", "mkv", "webm", "avi", "m4a", "mp3"],
        )
        if st.button("Generate subtitles", disabled=uploaded_file is None):
            if not api_healthy:
                st.error("Cannot upload: the API server is not reachable.")
            elif uploaded_file is not None:
                with st.spinner("Converting and transcribing..."):
                    result = upload_video(uploaded_file.getvalue(), uploaded_file.name)
                if result:
                    st.session_state.subtitles = result
                    st.session_state.video = uploaded_file.getvalue()
                    st.session_state.start_time = 0
                    st.success("Subtitles ready. Open the Subtitles page.")

    with youtube_tab:
        youtube_url = st.text_input("YouTube URL", placeholder="https://www.youtube.com/watch?v=...")
        if st.button("Fetch subtitles", disabled=not youtube_url):
            if not api_healthy:
                st.error("Cannot fetch: the API server is not reachable.")
            else:
                with st.spinner("Downloading and transcribing..."):
                    result = transcribe_youtube(youtube_url)
                if result:
                    st.session_state.subtitles = result
                    st.session_state.video = youtube_url
                    st.session_state.start_time = 0
                    title = (result.get("sourceInfo") or {}).get("title")
                    st.success(f"Subtitles ready for {title!r}." if title else "Subtitles ready.")

    with file_tab:
        subtitle_file = st.file_uploader("Import existing subtitles", type=["srt", "vtt"])
        if subtitle_file is not None and st.button("Load subtitles"):
            content = subtitle_file.getvalue().decode("utf-8-sig", errors="replace")
            parsed = parse_subtitles(content, subtitle_file.name.rsplit(".", 1)[-1])
            if parsed.segments:
                st.session_state.subtitles = parsed.model_dump(by_alias=True, exclude_none=True)
                st.session_state.video = None
                st.session_state.start_time = 0
                st.success(f"Loaded {len(parsed.segments)} subtitles. Open the Subtitles page.")
            else:
                st.error("No subtitles found in that file.")

# ---------------------------------------------------------------------------
# Page: Subtitles
# ---------------------------------------------------------------------------
elif page == "Subtitles":
    st.header("Subtitles")

    if not st.session_state.subtitles:
        st.info("No subtitles yet. Import a video to get started.")
    else:
        subtitles = FormattedSubtitles.model_validate(st.session_state.subtitles)
        if subtitles.source_info:
            st.caption(f"{subtitles.source_info.title} ({subtitles.source_info.url})")

        player_col, dict_col = st.columns([3, 2])

        with player_col:
            if st.session_state.video is not None:
                st.video(st.session_state.video, start_time=int(st.session_state.start_time))

            segment = st.selectbox(
                "Segment",
                options=subtitles.segments,
                format_func=segment_label,
            )
            if segment is not None:
                if st.button("Play from here"):
                    st.session_state.start_time = segment.start
                    st.rerun()

                tokens = [w.word.strip() for w in segment.words] or segment.text.split()
                picked = st.pills("Words", options=list(dict.fromkeys(tokens)), key=f"words_{segment.id}")
                if picked:
                    st.session_state.selected_word = normalize_word(picked)

            with st.expander("Full transcript"):
                for s in subtitles.segments:
                    st.write(segment_label(s))

            st.subheader("Export subtitles")
            export_cols = st.columns(len(SUBTITLE_FORMATS))
            for col, (fmt, (render, mime)) in zip(export_cols, SUBTITLE_FORMATS.items()):
                col.download_button(
                    fmt.upper(),
                    data=render(subtitles),
                    file_name=f"subtitles.{fmt}",
                    mime=mime,
                )

        with dict_col:
            if st.session_state.selected_word:
                show_definition(st.session_state.selected_word)
            else:
                st.info("Pick a word to see its definition.")

# ---------------------------------------------------------------------------
# Page: Saved Words
# ---------------------------------------------------------------------------
elif page == "Saved Words":
    st.header("Saved Words")

    with st.form("add_category", clear_on_submit=True):
        new_category = st.text_input("New category name")
        if st.form_submit_button("Add category"):
            if not vocabulary.add_category(new_category):
                st.warning("Category is empty or already exists.")

    if vocabulary.categories:
        st.caption("Categories")
        for category in vocabulary.categories:
            name_col, remove_col = st.columns([4, 1])
            name_col.write(category)
            if remove_col.button("Remove", key=f"rmcat_{category}"):
                vocabulary.remove_category(category)
                st.rerun()

    if not len(vocabulary):
        st.info("No saved words yet. Pick words from the Subtitles page.")
    else:
        category_filter = st.selectbox(
            "Show", ["All", "Uncategorized", *vocabulary.categories]
        )
        if category_filter == "All":
            selected = vocabulary.words()
        elif category_filter == "Uncategorized":
            selected = vocabulary.uncategorized()
        else:
            selected = vocabulary.words(category_filter)

        for saved in selected:
            label = ", ".join(saved.categories) or "Uncategorized"
            with st.expander(f"{saved.word} -- {label}"):
                if saved.entry and saved.entry.first_definition:
                    st.write(saved.entry.first_definition)
                if vocabulary.categories:
                    tags = st.pills(
                        "Categories",
                        options=vocabulary.categories,
                        selection_mode="multi",
                        default=saved.categories,
                        key=f"tags_{saved.word}",
                    )
                    for category in set(tags) ^ set(saved.categories):
                        vocabulary.toggle_category(saved.word, category)
                if st.button("Remove word", key=f"remove_{saved.word}"):
                    vocabulary.remove(saved.word)
                    st.rerun()

        st.subheader("Export words")
        export_cols = st.columns(len(WORD_FORMATS))
        for col, (fmt, (render, mime)) in zip(export_cols, WORD_FORMATS.items()):
            col.download_button(
                fmt.upper(),
                data=render(selected),
                file_name=f"vocabulary.{'txt' if fmt == 'anki' else fmt}",
                mime=mime,
            )

# ---------------------------------------------------------------------------
# Page: Quiz
# ---------------------------------------------------------------------------
elif page == "Quiz":
    st.header("Vocabulary Quiz")
    quiz: Quiz | None = st.session_state.quiz

    if quiz is None:
        mode = st.radio(
            "Quiz type",
            list(QuizMode),
            format_func=lambda m: "Multiple Choice" if m is QuizMode.MULTIPLE_CHOICE else "Flashcards",
            horizontal=True,
        )
        if len(vocabulary) < MIN_QUIZ_WORDS:
            st.info(f"You need at least {MIN_QUIZ_WORDS} saved words to take a quiz.")
        else:
            st.write(
                f"Test your knowledge of {min(QUIZ_LENGTH, len(vocabulary))} "
                "random words from your saved list."
            )
        if st.button("Start Quiz", disabled=len(vocabulary) < MIN_QUIZ_WORDS):
            st.session_state.quiz = build_quiz(vocabulary.words(), mode)
            st.rerun()

    elif quiz.completed:
        total = len(quiz.questions)
        st.metric("Score", f"{quiz.score} / {total}")
        st.write(result_message(quiz.score, total))
        if st.button("Try Again"):
            st.session_state.quiz = None
            st.rerun()

    else:
        question = quiz.current
        info_col, score_col = st.columns(2)
        info_col.caption(f"Question {quiz.index + 1} of {len(quiz.questions)}")
        score_col.caption(f"Score: {quiz.score} / {quiz.asked}")
        st.subheader(question.word.word)

        if quiz.mode is QuizMode.FLASHCARD:
            if question.word.entry and question.word.entry.phonetic:
                st.caption(question.word.entry.phonetic)
            if not quiz.answered:
                if st.button("Show Definition"):
                    st.session_state.reveal = True
                if st.session_state.reveal:
                    st.info(question.definition or "No definition available")
                    knew_col, learning_col = st.columns(2)
                    if knew_col.button("I knew it"):
                        quiz.grade(True)
                        st.rerun()
                    if learning_col.button("Still learning"):
                        quiz.grade(False)
                        st.rerun()
            else:
                st.info(question.definition or "No definition available")
        else:
            for i, option in enumerate(question.options):
                if st.button(
                    option.definition or "No definition available",
                    key=f"option_{quiz.index}_{i}",
                    disabled=quiz.answered,
                ):
                    st.session_state.last_choice_correct = quiz.choose(i)
                    st.rerun()
            if quiz.answered:
                if st.session_state.last_choice_correct:
                    st.success("Correct!")
                else:
                    st.error(f"Incorrect. The answer is: {question.definition}")

        if quiz.answered and st.button("Next"):
            quiz.advance()
            st.session_state.reveal = False
            st.rerun()

        if st.button("End quiz"):
            st.session_state.quiz = None
            st.rerun()

# ---------------------------------------------------------------------------
# Page: Stats
# ---------------------------------------------------------------------------
elif page == "Stats":
    st.header("Vocabulary Statistics")
    stats = vocabulary_stats(vocabulary.words())

    if not stats.total:
        st.info("No saved words yet.")
    else:
        total_col, new_col = st.columns(2)
        total_col.metric("Total Words", stats.total)
        new_col.metric("New This Week", stats.new_words)

        cat_col, uncat_col = st.columns(2)
        cat_col.metric("Categorized", stats.categorized)
        uncat_col.metric("Uncategorized", stats.uncategorized)

        top = stats.top_parts_of_speech()
        if top:
            st.subheader("Top Parts of Speech")
            for part, count in top:
                st.write(f"{part}: {count}")

        if stats.oldest and stats.newest:
            st.caption(
                f"First word: {stats.oldest.word} ({stats.oldest.saved_at:%b %d, %Y}). "
                f"Latest word: {stats.newest.word} ({stats.newest.saved_at:%b %d, %Y})."
            )
