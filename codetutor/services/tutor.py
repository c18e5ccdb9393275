"""
Code Tutor — Simulated Tutor Chat
==================================
Canned tutoring conversation, one transcript per lesson:
  - Suggested questions per lesson and mode
  - Exercise requests and self-evaluation tally
  - Per-message feedback
  - Transcript persistence under ``chat_history_<lesson>``
"""

import random
import asyncio
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Iterator, List, Optional, Set, Tuple

from codetutor.core.config import settings
from codetutor.schemas.chat import ChatMessage, ChatTranscript, ExerciseScore, TutorMode
from codetutor.services.onboarding import get_current_user
from codetutor.services.scoring import percentage
from codetutor.services.storage import KeyValueStore
from codetutor.services.topic_catalog import TUTOR_LESSONS

logger = logging.getLogger(__name__)

CURRENT_MODE_STORAGE = "currentMode"
_EXERCISE_KEYWORDS = ("exercício", "exercicio", "praticar")

# (storage file, lesson) pairs with a reply in progress.
_busy_lessons: Set[Tuple[str, str]] = set()


class TutorError(Exception):
    """A chat action that cannot be applied to the current transcript."""

    def __init__(self, message: str, status_code: int = 409):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CANNED CONTENT
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

TUTOR_RESPONSES: Dict[str, Dict[TutorMode, List[str]]] = {
    "html_intro": {
        TutorMode.iniciante: [
            "HTML (HyperText Markup Language) é a linguagem padrão para criar páginas web. "
            "Ela descreve a estrutura de uma página usando elementos (tags) que o navegador interpreta.",
            "As tags HTML são como blocos de construção para páginas web. Cada tag tem uma função "
            "específica, como <h1> para títulos principais, <p> para parágrafos e <img> para imagens.",
            "Um documento HTML básico tem uma estrutura como: <!DOCTYPE html><html><head><title>"
            "Título da página</title></head><body><h1>Olá mundo!</h1><p>Este é um parágrafo.</p>"
            "</body></html>",
        ],
        TutorMode.intermediario: [
            "Para projetos reais, é importante estruturar bem o HTML com tags semânticas. "
            "Isso ajuda na acessibilidade e no SEO da página.",
            "Algumas boas práticas de HTML incluem: usar tags semânticas, manter a indentação "
            "correta, usar atributos alt em imagens e validar seu código regularmente.",
            "Um problema comum é a compatibilidade entre navegadores. Você pode usar ferramentas "
            "como caniuse.com para verificar quais recursos são suportados em diferentes navegadores.",
        ],
        TutorMode.avancado: [
            "HTML5 trouxe muitos recursos avançados, como as APIs de Geolocalização, Canvas para "
            "desenhos, e Web Storage para armazenamento local. Essas APIs permitem criar aplicações "
            "web mais complexas e interativas.",
            "Para SEO avançado, considere usar microdata ou JSON-LD para implementar Schema.org, "
            "melhorando como os motores de busca interpretam seu conteúdo.",
            "Comparando com outras tecnologias, HTML é apenas para estrutura. Para estilos, você "
            "precisa de CSS, e para interatividade, JavaScript. Frameworks como React e Vue usam "
            "componentes que combinam esses três.",
        ],
    },
    "css_basics": {
        TutorMode.iniciante: [
            "CSS (Cascading Style Sheets) é usado para estilizar elementos HTML. Com CSS, você "
            "controla o layout, cores, fontes e aparência geral da página.",
            "Os seletores CSS são padrões que selecionam elementos HTML para aplicar estilos. "
            "Você pode selecionar por tag, classe (.classe), ID (#id) ou atributos.",
            "Um exemplo simples de CSS: 'body { background-color: #f0f0f0; } h1 { color: blue; "
            "font-size: 24px; } p { margin: 10px; }'.",
        ],
    },
}

EXERCISES: Dict[str, str] = {
    "html_intro": "Crie uma página HTML simples com um título (h1), um subtítulo (h2), "
                  "um parágrafo e uma lista não ordenada com 3 itens.",
    "html_semantic": "Converta o seguinte HTML para usar tags semânticas: <div class='header'>...</div> "
                     "<div class='nav'>...</div> <div class='main'>...</div> <div class='footer'>...</div>",
    "css_basics": "Crie um CSS que faça todos os parágrafos terem texto verde, fonte de 16px "
                  "e um padding de 10px.",
    "css_layout": "Usando Flexbox, crie um layout com 3 colunas de mesma largura em telas grandes, "
                  "e que empilhe em telas pequenas.",
    "js_intro": "Escreva uma função JavaScript que receba um número e retorne true se for par "
                "e false se for ímpar.",
    "js_dom": "Escreva código JavaScript que adicione uma classe 'highlight' a todos os "
              "elementos <li> quando clicados.",
}
DEFAULT_EXERCISE = "Vamos praticar! Crie um pequeno exemplo usando o que aprendemos neste tópico."

EVALUATION_REPLIES = {
    True: "Parabéns! Você está no caminho certo. Vamos continuar aprendendo.",
    False: "Não tem problema! Aprender envolve cometer erros. Vamos revisar o conceito.",
}


def lesson_name(lesson_key: str) -> str:
    lesson = TUTOR_LESSONS.get(lesson_key)
    return lesson.name if lesson else lesson_key


def suggested_questions(lesson_key: str, mode: TutorMode) -> List[str]:
    """Three mode-specific prompts followed by two general ones."""
    lesson = TUTOR_LESSONS.get(lesson_key)
    name = lesson.name if lesson else "este tópico"

    by_mode = {
        TutorMode.iniciante: [
            f"O que é {name}?",
            f"Quais os conceitos básicos de {name}?",
            f"Poderia dar um exemplo simples de {name}?",
        ],
        TutorMode.intermediario: [
            f"Como posso aplicar {name} em um projeto real?",
            f"Quais são as melhores práticas para {name}?",
            f"Existe algum problema comum ao usar {name} e como resolvê-lo?",
        ],
        TutorMode.avancado: [
            f"Explique as nuances avançadas de {name}.",
            f"Quais são os casos de uso complexos para {name}?",
            f"Compare {name} com tecnologias alternativas.",
        ],
    }
    return by_mode.get(TutorMode(mode), []) + [
        "Poderia me dar um exercício sobre o tema atual?",
        "Quais os próximos passos na trilha de aprendizado?",
    ]


def is_exercise_request(text: str) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in _EXERCISE_KEYWORDS)


def exercise_for(lesson_key: str) -> str:
    return EXERCISES.get(lesson_key, DEFAULT_EXERCISE)


def tutor_response(lesson_key: str, mode: TutorMode) -> str:
    responses = TUTOR_RESPONSES.get(lesson_key, {}).get(TutorMode(mode))
    if not responses:
        return (
            f"Estou aqui para ajudar com qualquer dúvida sobre {lesson_name(lesson_key)}. "
            "O que gostaria de saber?"
        )
    return random.choice(responses)


def exercise_score(transcript: ChatTranscript) -> Optional[ExerciseScore]:
    if transcript.total_exercises_attempted == 0:
        return None
    return ExerciseScore(
        correct=transcript.correct_exercises_count,
        attempted=transcript.total_exercises_attempted,
        percentage=percentage(
            transcript.correct_exercises_count, transcript.total_exercises_attempted
        ),
    )


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# SERVICE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TutorService:
    def __init__(self, store: KeyValueStore, reply_delay: Optional[float] = None):
        self.store = store
        self.reply_delay = reply_delay

    @staticmethod
    def _history_key(lesson_key: str) -> str:
        return f"chat_history_{lesson_key}"

    async def _pause(self) -> None:
        delay = settings.TUTOR_REPLY_DELAY_SECONDS if self.reply_delay is None else self.reply_delay
        if delay > 0:
            await asyncio.sleep(delay)

    async def load_transcript(self, lesson_key: str) -> ChatTranscript:
        data = await self.store.get_json(self._history_key(lesson_key))
        if not data:
            return ChatTranscript()
        return ChatTranscript.model_validate(data)

    async def save_transcript(self, lesson_key: str, transcript: ChatTranscript) -> None:
        if not transcript.messages:
            return
        await self.store.set_json(
            self._history_key(lesson_key), transcript.model_dump(mode="json", by_alias=True)
        )

    async def current_mode(self) -> TutorMode:
        stored = await self.store.get_item(CURRENT_MODE_STORAGE)
        try:
            return TutorMode(stored)
        except ValueError:
            return TutorMode.iniciante

    @staticmethod
    def _append(transcript: ChatTranscript, text: str, sender: str) -> ChatMessage:
        message = ChatMessage(
            id=len(transcript.messages) + 1,
            text=text,
            sender=sender,
            timestamp=_timestamp(),
        )
        transcript.messages.append(message)
        return message

    @contextmanager
    def _lesson_busy(self, lesson_key: str) -> Iterator[None]:
        """Hold one lesson's transcript from load through save; overlapping calls get 409."""
        slot = (str(self.store.path), lesson_key)
        if slot in _busy_lessons:
            raise TutorError("The tutor is still replying in this lesson. Try again shortly.")
        _busy_lessons.add(slot)
        try:
            yield
        finally:
            _busy_lessons.discard(slot)

    async def send_message(self, lesson_key: str, mode: TutorMode, text: str) -> ChatTranscript:
        """Append the learner's message and the tutor's reply."""
        if not text.strip():
            raise TutorError("Message text cannot be empty.", status_code=400)
        with self._lesson_busy(lesson_key):
            user = await get_current_user(self.store)
            if user is None:
                raise TutorError("No registered user. Complete onboarding first.", status_code=401)
            return await self._exchange(lesson_key, mode, text)

    async def _exchange(self, lesson_key: str, mode: TutorMode, text: str) -> ChatTranscript:
        transcript = await self.load_transcript(lesson_key)
        self._append(transcript, text, "user")
        transcript.last_message_is_exercise = False
        transcript.has_evaluated_last_exercise = False

        await self._pause()

        if is_exercise_request(text):
            self._append(transcript, exercise_for(lesson_key), "tutor")
            transcript.last_message_is_exercise = True
            logger.info(f"[TUTOR] Exercise sent for {lesson_key}")
        else:
            self._append(transcript, tutor_response(lesson_key, mode), "tutor")

        await self.save_transcript(lesson_key, transcript)
        return transcript

    async def evaluate_exercise(self, lesson_key: str, is_correct: bool) -> ChatTranscript:
        """Record the learner's own verdict on the pending exercise."""
        with self._lesson_busy(lesson_key):
            transcript = await self.load_transcript(lesson_key)
            if not transcript.last_message_is_exercise or transcript.has_evaluated_last_exercise:
                raise TutorError("There is no pending exercise to evaluate.")

            transcript.has_evaluated_last_exercise = True
            transcript.total_exercises_attempted += 1
            if is_correct:
                transcript.correct_exercises_count += 1

            await self._pause()
            self._append(transcript, EVALUATION_REPLIES[bool(is_correct)], "tutor")

            await self.save_transcript(lesson_key, transcript)
        logger.info(
            f"[TUTOR] {lesson_key}: {transcript.correct_exercises_count}/"
            f"{transcript.total_exercises_attempted} exercises correct"
        )
        return transcript

    async def record_feedback(self, lesson_key: str, message_id: int, feedback: str) -> ChatTranscript:
        with self._lesson_busy(lesson_key):
            transcript = await self.load_transcript(lesson_key)
            message = next((m for m in transcript.messages if m.id == message_id), None)
            if message is None:
                raise TutorError(f"Message {message_id} not found.", status_code=404)

            message.feedback = feedback
            message.feedback_shown = True
            await self.save_transcript(lesson_key, transcript)
        return transcript

    async def change_mode(
        self, lesson_key: str, current: TutorMode, new: TutorMode
    ) -> ChatTranscript:
        """Announce the new mode in the chat, then persist it."""
        if new == current:
            return await self.load_transcript(lesson_key)
        transcript = await self.send_message(
            lesson_key, new, f"Mudei para o modo {TutorMode(new).value}."
        )
        await self.store.set_item(CURRENT_MODE_STORAGE, TutorMode(new).value)
        return transcript
