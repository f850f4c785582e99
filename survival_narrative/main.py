# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from survival_narrative.api.narrative_routes import narrative_router, set_engine
from survival_narrative.config import APP_NAME, DEFAULT_RNG_SEED
from survival_narrative.world.narrative_engine import NarrativeEngine

allow_origins = (
    os.getenv("ALLOW_ORIGINS", "").split(",") if os.getenv("ALLOW_ORIGINS") else None
)
seed = (
    int(os.environ["NARRATIVE_SEED"])
    if os.getenv("NARRATIVE_SEED")
    else DEFAULT_RNG_SEED
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the narrative engine on startup and drop it on shutdown."""
    set_engine(NarrativeEngine(seed=seed))
    logger.info("Narrative engine started (seed=%s).", seed)

    yield

    set_engine(None)
    logger.info("Narrative engine stopped.")


app = FastAPI(
    title=APP_NAME,
    description="API for stepping the survival narrative engine",
    lifespan=lifespan,
)
if allow_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Mount narrative API
app.include_router(narrative_router, prefix="/api/narrative")


# Main execution
if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8000)
