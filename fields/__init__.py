from .base import Field, Viewport
from .precipitation import Particle, ParticleField, RAIN, SNOW, MIXED
from .clouds import CloudParticle, CloudField, CloudLayer, CLOUD_LAYERS
