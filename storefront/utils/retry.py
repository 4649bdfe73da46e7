# storefront/utils/retry.py
import redis
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type


#tylko bledy transportu redisa, logika biznesowa nigdy nie jest ponawiana
def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.RedisError),
    )
