"""
End-to-end component flows against a real SQLite database.
"""

import threading
from uuid import uuid4

import pytest

from devflow.adapters.sqlite.database import Database
from devflow.adapters.sqlite.repos import SQLiteQuestionRepo, SQLiteTagRepo
from devflow.components.answers import (
    AnswerVoteInput,
    CreateAnswerInput,
    run_create_answer,
    run_upvote_answer,
)
from devflow.components.questions import (
    CreateQuestionInput,
    DeleteQuestionInput,
    EditQuestionInput,
    GetQuestionInput,
    QuestionVoteInput,
    ViewQuestionInput,
    run_create_question,
    run_delete_question,
    run_downvote_question,
    run_edit_question,
    run_get_question,
    run_get_questions,
    run_upvote_question,
    run_view_question,
)
from devflow.components.users import ProfileInput, run_get_profile


@pytest.fixture
def create(question_repo, tag_repo, interaction_repo, db, revalidator, clock):
    def _create(author_id, tags, title="How do goroutines work?", path="/"):
        result = run_create_question(
            CreateQuestionInput(
                title=title, content="Body", tags=tags, author_id=author_id, path=path
            ),
            questions=question_repo,
            tags=tag_repo,
            uow=db,
            revalidator=revalidator,
            time=clock,
            interactions=interaction_repo,
        )
        assert result.success, result.errors
        return result.question

    return _create


def test_create_then_get_round_trip(create, question_repo, tag_repo, user_repo, author):
    q = create(author.id, ["python", "asyncio"])

    result = run_get_question(
        GetQuestionInput(question_id=q.id),
        questions=question_repo,
        tags=tag_repo,
        users=user_repo,
    )

    assert result.success
    detail = result.question
    assert detail.title == "How do goroutines work?"
    assert [t.name for t in detail.tags] == ["python", "asyncio"]
    assert detail.author.clerk_id == "user_author"
    assert detail.author.name == "Ada Author"


def test_get_missing_question_is_empty_not_error(question_repo, tag_repo, user_repo):
    result = run_get_question(
        GetQuestionInput(question_id=uuid4()),
        questions=question_repo,
        tags=tag_repo,
        users=user_repo,
    )
    assert result.success
    assert result.question is None


def test_repeated_tag_in_different_casings_resolves_to_one(create, tag_repo, author):
    q = create(author.id, ["Go", "go", "GO"])

    assert len(q.tag_ids) == 1
    tag = tag_repo.get_by_name("go")
    assert tag.name == "Go"
    assert tag.question_ids == [q.id]
    assert len(tag_repo.list_all()) == 1


def test_non_ascii_casings_resolve_to_one_tag_each(create, tag_repo, author):
    q = create(author.id, ["Ñandú", "ñandú", "ÉCOLE", "école", "Питон", "питон"])

    assert len(q.tag_ids) == 3
    assert len(tag_repo.list_all()) == 3
    assert tag_repo.get_by_name("ñandú").name == "Ñandú"
    assert tag_repo.get_by_name("école").name == "ÉCOLE"
    assert tag_repo.get_by_name("ПИТОН").name == "Питон"


def test_existing_tag_is_reused_across_questions(create, tag_repo, author):
    q1 = create(author.id, ["Python"], title="First")
    q2 = create(author.id, ["python"], title="Second")

    assert q1.tag_ids == q2.tag_ids
    assert tag_repo.get_by_name("PYTHON").question_ids == [q1.id, q2.id]


def test_create_records_interaction_and_revalidates(
    create, interaction_repo, revalidator, author
):
    q = create(author.id, ["python"], path="/ask")

    [interaction] = interaction_repo.list_by_question(q.id)
    assert interaction.action == "ask_question"
    assert interaction.user_id == author.id
    assert interaction.tag_ids == q.tag_ids
    assert revalidator.requested == ["/ask"]


def test_list_questions_populates_relations(
    create, question_repo, tag_repo, user_repo, author
):
    create(author.id, ["python"], title="First")
    create(author.id, ["rust"], title="Second")

    result = run_get_questions(questions=question_repo, tags=tag_repo, users=user_repo)

    assert result.success
    assert len(result.questions) == 2
    for q in result.questions:
        assert q.author.id == author.id
        assert len(q.tags) == 1


def test_edit_question(create, question_repo, db, revalidator, author):
    q = create(author.id, ["python"])

    result = run_edit_question(
        EditQuestionInput(question_id=q.id, title="Edited", content="New body", path="/q"),
        questions=question_repo,
        uow=db,
        revalidator=revalidator,
    )

    assert result.success
    fetched = question_repo.get_by_id(q.id)
    assert fetched.title == "Edited"
    assert fetched.content == "New body"
    assert fetched.tag_ids == q.tag_ids
    assert revalidator.requested[-1] == "/q"


def test_edit_missing_question_writes_nothing(create, question_repo, db, revalidator, author):
    q = create(author.id, [])
    revalidator.clear()

    result = run_edit_question(
        EditQuestionInput(question_id=uuid4(), title="Edited", content="Body", path="/"),
        questions=question_repo,
        uow=db,
        revalidator=revalidator,
    )

    assert not result.success
    assert result.errors[0].code == "not_found"
    assert result.errors[0].message == "Question not found"
    assert question_repo.get_by_id(q.id).title == "How do goroutines work?"
    assert revalidator.requested == []


def test_delete_cascades(
    create,
    question_repo,
    answer_repo,
    interaction_repo,
    tag_repo,
    vote_repo,
    db,
    revalidator,
    clock,
    author,
    voter,
):
    q = create(author.id, ["python"])
    answer = run_create_answer(
        CreateAnswerInput(question_id=q.id, author_id=voter.id, content="Use open()", path="/"),
        questions=question_repo,
        answers=answer_repo,
        uow=db,
        revalidator=revalidator,
        time=clock,
        interactions=interaction_repo,
    ).answer
    vote_repo.set_vote("question", q.id, voter.id, "up")
    vote_repo.set_vote("answer", answer.id, author.id, "up")

    result = run_delete_question(
        DeleteQuestionInput(question_id=q.id, path="/profile"),
        questions=question_repo,
        answers=answer_repo,
        interactions=interaction_repo,
        tags=tag_repo,
        votes=vote_repo,
        uow=db,
        revalidator=revalidator,
    )

    assert result.success
    assert question_repo.get_by_id(q.id) is None
    assert answer_repo.list_by_question(q.id) == []
    assert interaction_repo.list_by_question(q.id) == []
    assert tag_repo.get_by_name("python").question_ids == []
    assert vote_repo.tally("question", q.id).upvotes == 0
    assert vote_repo.tally("answer", answer.id).upvotes == 0
    assert revalidator.requested[-1] == "/profile"


def test_delete_missing_question(
    question_repo, answer_repo, interaction_repo, tag_repo, vote_repo, db, revalidator
):
    result = run_delete_question(
        DeleteQuestionInput(question_id=uuid4(), path="/"),
        questions=question_repo,
        answers=answer_repo,
        interactions=interaction_repo,
        tags=tag_repo,
        votes=vote_repo,
        uow=db,
        revalidator=revalidator,
    )
    assert not result.success
    assert result.errors[0].code == "not_found"


def test_question_vote_toggles(create, vote_repo, db, revalidator, author, voter):
    q = create(author.id, [])

    def vote(fn, has_up, has_down):
        return fn(
            QuestionVoteInput(
                question_id=q.id,
                user_id=voter.id,
                has_upvoted=has_up,
                has_downvoted=has_down,
                path="/question",
            ),
            votes=vote_repo,
            uow=db,
            revalidator=revalidator,
        ).tally

    tally = vote(run_upvote_question, False, False)
    assert (tally.upvotes, tally.downvotes) == (1, 0)

    # Switching direction replaces the vote
    tally = vote(run_downvote_question, True, False)
    assert (tally.upvotes, tally.downvotes) == (0, 1)

    # Same direction again cancels it
    tally = vote(run_downvote_question, False, True)
    assert (tally.upvotes, tally.downvotes) == (0, 0)


def test_upvote_missing_question(vote_repo, db, revalidator):
    result = run_upvote_question(
        QuestionVoteInput(
            question_id=uuid4(),
            user_id=uuid4(),
            has_upvoted=False,
            has_downvoted=False,
            path="/",
        ),
        votes=vote_repo,
        uow=db,
        revalidator=revalidator,
    )
    assert not result.success
    assert result.errors[0].message == "Question not found"
    assert revalidator.requested == []


def test_answer_flow(
    create, question_repo, answer_repo, vote_repo, db, revalidator, clock, author, voter
):
    q = create(author.id, ["python"])

    created = run_create_answer(
        CreateAnswerInput(question_id=q.id, author_id=voter.id, content="Answer", path="/q"),
        questions=question_repo,
        answers=answer_repo,
        uow=db,
        revalidator=revalidator,
        time=clock,
    )
    assert created.success

    voted = run_upvote_answer(
        AnswerVoteInput(
            answer_id=created.answer.id,
            user_id=author.id,
            has_upvoted=False,
            has_downvoted=False,
            path="/q",
        ),
        votes=vote_repo,
        uow=db,
        revalidator=revalidator,
    )
    assert voted.success
    assert voted.tally.upvotes == 1


def test_view_counts_and_records_once_per_user(
    create, question_repo, interaction_repo, db, author, voter
):
    q = create(author.id, ["python"])

    def view(user_id):
        return run_view_question(
            ViewQuestionInput(question_id=q.id, user_id=user_id),
            questions=question_repo,
            interactions=interaction_repo,
            uow=db,
        )

    view(voter.id)
    view(voter.id)
    result = view(None)

    assert result.success
    assert result.question.views == 3
    views = [i for i in interaction_repo.list_by_question(q.id) if i.action == "view"]
    assert len(views) == 1
    assert views[0].user_id == voter.id


def test_profile_after_activity(create, user_repo, question_repo, answer_repo, author):
    for i in range(3):
        create(author.id, [], title=f"Q{i}")

    result = run_get_profile(
        ProfileInput(clerk_id="user_author", viewer_clerk_id="user_author", page=1, page_size=2),
        users=user_repo,
        questions=question_repo,
        answers=answer_repo,
    )

    assert result.success
    assert result.total_questions == 3
    assert len(result.questions) == 2
    assert result.questions_is_next
    assert result.can_edit


def test_operations_fail_without_connection(revalidator, clock):
    disconnected = Database(None)
    result = run_create_question(
        CreateQuestionInput(title="T", content="C", tags=[], author_id=uuid4(), path="/"),
        questions=SQLiteQuestionRepo(disconnected),
        tags=SQLiteTagRepo(disconnected),
        uow=disconnected,
        revalidator=revalidator,
        time=clock,
    )
    assert not result.success
    assert result.errors[0].code == "connection_unavailable"
    assert revalidator.requested == []


def test_concurrent_creates_share_one_tag(db, author, revalidator, clock):
    questions = SQLiteQuestionRepo(db)
    tags = SQLiteTagRepo(db)
    results = []
    barrier = threading.Barrier(8)

    def worker(i):
        barrier.wait()
        results.append(
            run_create_question(
                CreateQuestionInput(
                    title=f"Q{i}", content="C", tags=["Rust"], author_id=author.id, path="/"
                ),
                questions=questions,
                tags=tags,
                uow=db,
                revalidator=revalidator,
                time=clock,
            )
        )

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert all(r.success for r in results)
    [tag] = tags.list_all()
    assert len(tag.question_ids) == 8
    assert {r.question.tag_ids[0] for r in results} == {tag.id}
