"""S3クライアント管理"""
import boto3
from typing import Optional, Dict, Any
from botocore.exceptions import NoCredentialsError, ClientError
from ..models.config import AWSConfig
from ..utils.logger import LoggerManager


class S3ClientManager:
    """S3クライアントの作成と管理"""

    def __init__(self, aws_config: AWSConfig):
        self.aws_config = aws_config
        self.logger = LoggerManager.get_logger()
        self._client = None

    def get_client(self):
        """S3クライアントを取得（必要に応じて作成）"""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _client_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"region_name": self.aws_config.region}
        if self.aws_config.endpoint_url:
            kwargs["endpoint_url"] = self.aws_config.endpoint_url
        return kwargs

    def _session(self) -> boto3.Session:
        if self.aws_config.profile:
            return boto3.Session(profile_name=self.aws_config.profile)
        return boto3.Session()

    def _create_client(self):
        """S3クライアントを作成"""
        try:
            if self.aws_config.assume_role:
                temp_credentials = self._assume_role()
                if temp_credentials:
                    s3_client = boto3.client(
                        's3',
                        aws_access_key_id=temp_credentials['access_key_id'],
                        aws_secret_access_key=temp_credentials['secret_access_key'],
                        aws_session_token=temp_credentials['session_token'],
                        **self._client_kwargs()
                    )
                    self.logger.info("S3 client created with assumed role credentials.")
                    return s3_client
                self.logger.warning("Falling back to default credentials after assume role failure.")

            s3_client = self._session().client('s3', **self._client_kwargs())
            self.logger.info("S3 client created with default credentials.")
            return s3_client

        except NoCredentialsError:
            self.logger.error("AWS credentials not available.")
            raise
        except Exception as e:
            self.logger.error(f"Error creating S3 client: {e}")
            raise

    def _assume_role(self) -> Optional[Dict[str, str]]:
        """AssumeRoleを実行して一時的な認証情報を取得"""
        assume_role_config = self.aws_config.assume_role

        try:
            endpoint_url = f"https://sts.{self.aws_config.region}.amazonaws.com"
            sts_client = self._session().client(
                'sts',
                region_name=self.aws_config.region,
                endpoint_url=endpoint_url
            )

            assume_role_params = {
                'RoleArn': assume_role_config.role_arn,
                'RoleSessionName': assume_role_config.session_name,
                'DurationSeconds': assume_role_config.duration_seconds,
            }

            if assume_role_config.external_id:
                assume_role_params['ExternalId'] = assume_role_config.external_id

            response = sts_client.assume_role(**assume_role_params)
            credentials = response['Credentials']

            self.logger.info(f"Assumed role successfully: {assume_role_config.role_arn}")

            return {
                'access_key_id': credentials['AccessKeyId'],
                'secret_access_key': credentials['SecretAccessKey'],
                'session_token': credentials['SessionToken']
            }

        except ClientError as e:
            self.logger.error(f"Error assuming role: {e}")
            return None
