import asyncio
import logging
from typing import Any, Optional

from langchain_core.prompts import PromptTemplate
from langchain_openai import ChatOpenAI

from agent.dispatcher import ActionDispatcher
from agent.errors import NotReadyError
from agent.intent import UnrecognizedIntent, parse_intent
from agent.prompts import DEFAULT_PROMPT_TEMPLATE
from agent.results import PromptResult, failure, success, unrecognized
from agent.state import ChainContext, InitializationGate
from models.agent_config import AgentConfig
from services.proxy_service import ProxyService
from services.substrate_service import SubstrateService
from services.xcm_service import XcmTransferService

logger = logging.getLogger(__name__)


class PolkadotAgent:
    """
    Turns natural-language instructions into proxy and XCM operations.

    Construction returns immediately; key derivation and the node connection
    run in the background. Use ``wait_for_ready()`` before ``handle_prompt()``.
    Prompts on one agent are processed one at a time.
    """

    def __init__(
        self,
        config: AgentConfig,
        model: Optional[Any] = None,
        substrate_service: Optional[SubstrateService] = None,
        proxy_service: Optional[ProxyService] = None,
        xcm_service: Optional[XcmTransferService] = None
    ):
        self.config = config

        if model is None:
            model = ChatOpenAI(
                api_key=config.openai_api_key,
                model=config.model_name,
                temperature=config.temperature,
            )
        self.model = model
        self.prompt = PromptTemplate(
            template=config.custom_prompt_template or DEFAULT_PROMPT_TEMPLATE,
            input_variables=['input'],
        )

        self.substrate_service = substrate_service or SubstrateService()
        self.dispatcher = ActionDispatcher(
            proxy_service=proxy_service or ProxyService(self.substrate_service),
            xcm_service=xcm_service or XcmTransferService(self.substrate_service),
            proxy_policy=config.proxy_policy,
        )

        self.gate = InitializationGate()
        self._init_task: Optional[asyncio.Task] = None
        self._lock: Optional[asyncio.Lock] = None

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.info("No running event loop, initialization deferred until wait_for_ready()")
        else:
            self.start()

    def start(self) -> asyncio.Task:
        """Schedule initialization on the running loop (idempotent)."""
        if self._init_task is None:
            self._init_task = asyncio.get_running_loop().create_task(self._initialize())
        return self._init_task

    async def _initialize(self) -> None:
        try:
            signer = self.substrate_service.derive_keypair(self.config.private_key)
            self.gate.set_signer(signer)

            session = await self.substrate_service.connect(self.config.ws_endpoint)

            if self.gate.closed:
                logger.info("Agent disconnected while connecting, closing the new session")
                await self.substrate_service.disconnect(session)
                return

            self.gate.resolve(ChainContext(session=session, signer=signer))

            logger.info("✅ Agent initialized for %s", signer.ss58_address)
        except Exception as e:
            logger.error("❌ Agent initialization error: %s", e, exc_info=True)
            self.gate.fail(e)

    @property
    def is_ready(self) -> bool:
        return self.gate.is_ready

    async def wait_for_ready(self, timeout: Optional[float] = None) -> None:
        """Resolve once initialization completes; re-raise its error if it failed."""
        self.start()
        await self.gate.wait(timeout)

    async def handle_prompt(self, text: str) -> str:
        result = await self.process_prompt(text)
        return result.message

    async def process_prompt(self, text: str) -> PromptResult:
        """
        Interpret one instruction and execute it.

        Raises:
            NotReadyError: Signing key or connection is not initialized yet
        """
        self.gate.require()

        if self._lock is None:
            self._lock = asyncio.Lock()

        async with self._lock:
            # A queued prompt may run after disconnect()
            context = self.gate.require()

            try:
                chain = self.prompt | self.model
                response = await chain.ainvoke({'input': text})

                intent = parse_intent(response.content)
                message = await self.dispatcher.dispatch(intent, context)

                if isinstance(intent, UnrecognizedIntent):
                    return unrecognized(message)
                return success(message)

            except NotReadyError:
                raise
            except Exception as e:
                return failure(e)

    async def disconnect(self) -> None:
        context = self.gate.context
        self.gate.close()

        # The connect worker thread cannot be cancelled; let it finish and close its session
        if self._init_task is not None and not self._init_task.done():
            await self._init_task

        if context is not None:
            await self.substrate_service.disconnect(context.session)
